"""
(C) Copyright 2026 The pysafesql Authors.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

import pytest

from pysafesql.exception import ArgumentTypeError, EmptySetError, ExecutionError
from pysafesql.exception import ProgrammingError


class TestWriteHelpers(object):

    def test_insert(self, db, session):
        session.add_ok(affected=1, insert_id=17)
        assert db.insert('users', {'name': 'ana', 'age': 30}) == 17
        assert session.last_statement == "INSERT INTO `users` SET `name`='ana',`age`='30'"

    def test_insert_without_auto_increment(self, db, session):
        session.add_ok(affected=1)
        assert db.insert('tags', {'tag': 'x'}) == 0

    def test_insert_empty(self, db, session):
        with pytest.raises(EmptySetError):
            db.insert('users', {})
        assert session.statements == []

    def test_update(self, db, session):
        session.add_ok(affected=2)
        assert db.update('users', {'role': 'staff'}, "id IN (?a)", [1, 2]) == 2
        assert session.last_statement \
            == "UPDATE `users` SET `role`='staff' WHERE id IN ('1','2')"

    def test_update_without_where(self, db, session):
        session.add_ok(affected=5)
        assert db.update('users', {'active': 0}) == 5
        assert session.last_statement == "UPDATE `users` SET `active`='0'"

    def test_update_where_arguments_stay_literal(self, db, session):
        db.update('t', {'a': '?i'}, "b = ?s", "?n")
        assert session.last_statement == "UPDATE `t` SET `a`='?i' WHERE b = '?n'"

    def test_delete(self, db, session):
        session.add_ok(affected=1)
        assert db.delete('users', "id = ?i", 9) == 1
        assert session.last_statement == "DELETE FROM `users` WHERE id = 9"

    def test_delete_all(self, db, session):
        session.add_ok(affected=4)
        assert db.delete('sessions') == 4
        assert session.last_statement == "DELETE FROM `sessions`"

    def test_upsert_inserted(self, db, session):
        session.add_ok(affected=1, insert_id=8)
        assert db.upsert('counters', {'k': 'hits', 'v': 1}) == 8
        assert session.last_statement == (
            "INSERT INTO `counters` SET `k`='hits',`v`='1'"
            " ON DUPLICATE KEY UPDATE `k`='hits',`v`='1'")

    def test_upsert_updated(self, db, session):
        session.add_ok(affected=2, insert_id=0)
        assert db.upsert('counters', {'k': 'hits', 'v': 2}) == 2

    def test_insert_batch(self, db, session):
        session.add_ok(affected=2)
        assert db.insert_batch('t', [{'a': 1, 'b': 2}, {'a': 3, 'b': 4}]) == 2
        assert session.last_statement == "INSERT INTO `t` (`a`,`b`) VALUES ('1','2'),('3','4')"

    def test_insert_batch_escapes(self, db, session):
        db.insert_batch('t`x', [{'n`ame': "O'Neil", 'v': None}])
        assert session.last_statement \
            == "INSERT INTO `t``x` (`n``ame`,`v`) VALUES ('O\\'Neil',NULL)"

    def test_insert_batch_column_order_from_first_row(self, db, session):
        db.insert_batch('t', [{'a': 1, 'b': 2}, {'b': 4, 'a': 3, 'c': 5}])
        assert session.last_statement == "INSERT INTO `t` (`a`,`b`) VALUES ('1','2'),('3','4')"

    def test_insert_batch_empty(self, db, session):
        assert db.insert_batch('t', []) == 0
        assert session.statements == []

    def test_insert_batch_missing_column(self, db, session):
        with pytest.raises(ProgrammingError):
            db.insert_batch('t', [{'a': 1, 'b': 2}, {'a': 3}])
        assert session.statements == []

    def test_insert_batch_empty_row(self, db, session):
        with pytest.raises(ProgrammingError):
            db.insert_batch('t', [{}])


class TestReadHelpers(object):

    def test_count(self, db, session):
        session.add_rows(['COUNT(*)'], [(12,)])
        assert db.count('users') == 12
        assert session.last_statement == "SELECT COUNT(*) FROM `users`"

    def test_count_where(self, db, session):
        session.add_rows(['COUNT(*)'], [(3,)])
        assert db.count('users', "status = ?s AND age > ?i", 'active', 18) == 3
        assert session.last_statement \
            == "SELECT COUNT(*) FROM `users` WHERE status = 'active' AND age > 18"

    def test_count_converts_to_int(self, db, session):
        session.add_rows(['COUNT(*)'], [('7',)])
        assert db.count('users') == 7

    def test_exists(self, db, session):
        session.add_rows(['id'], [(1,)]).add_rows(['id'], [])
        assert db.exists("SELECT id FROM ?n WHERE email = ?s", 'users', 'a@b.c') is True
        assert db.exists("SELECT id FROM ?n WHERE email = ?s", 'users', 'x@y.z') is False
        assert all(c.closed for c in session.cursors)

    def test_exists_on_dml(self, db, session):
        assert db.exists("DO 1") is False

    def test_find_by_id(self, db, session):
        session.add_rows(['id', 'name'], [(5, 'ana')])
        assert db.find_by_id('users', 5) == {'id': 5, 'name': 'ana'}
        assert session.last_statement == "SELECT * FROM `users` WHERE `id` = 5"

    def test_find_by_id_column(self, db, session):
        session.add_rows(['uid'], [])
        assert db.find_by_id('users', '5', id_column='uid') is None
        assert session.last_statement == "SELECT * FROM `users` WHERE `uid` = 5"

    def test_find_by_id_rejects_text(self, db, session):
        with pytest.raises(ArgumentTypeError):
            db.find_by_id('users', '5 OR 1=1')
        assert session.statements == []

    def test_find_by(self, db, session):
        session.add_rows(['id', 'email'], [(2, 'a@b.c')])
        assert db.find_by('users', 'email', 'a@b.c') == {'id': 2, 'email': 'a@b.c'}
        assert session.last_statement == "SELECT * FROM `users` WHERE `email` = 'a@b.c'"

    def test_find_all(self, db, session):
        session.add_rows(['id'], [(1,), (2,)]).add_rows(['id'], [(2,)])
        assert db.find_all('users') == [{'id': 1}, {'id': 2}]
        assert session.statements[-1] == "SELECT * FROM `users`"
        assert db.find_all('users', "id > ?i", 1) == [{'id': 2}]
        assert session.statements[-1] == "SELECT * FROM `users` WHERE id > 1"


class TestTelemetry(object):

    def test_last_query(self, db, session):
        assert db.last_query() is None
        db.query("UPDATE ?n SET ?u", "t", {'a': 1})
        assert db.last_query() == "UPDATE `t` SET `a`='1'"

    def test_last_query_after_failure(self, db, session):
        session.add_error("Unknown column 'b'", 1054)
        with pytest.raises(ExecutionError) as ex:
            db.query("SELECT b FROM ?n", "t")
        assert db.last_query() == "SELECT b FROM `t`"
        assert ex.value.statement == db.last_query()

    def test_stats(self, db, session):
        db.insert('t', {'a': 1})
        db.delete('t', "a = ?i", 1)
        stats = db.stats()
        assert [s.statement for s in stats] \
            == ["INSERT INTO `t` SET `a`='1'", "DELETE FROM `t` WHERE a = 1"]
        assert all(s.error is None and s.elapsed >= 0 for s in stats)

    def test_stats_is_a_snapshot(self, db, session):
        db.query("DO 1")
        stats = db.stats()
        db.query("DO 2")
        assert len(stats) == 1
        assert len(db.stats()) == 2


class TestGuards(object):

    def test_whitelist(self, db):
        assert db.whitelist('price', ['name', 'price'], 'name') == 'price'
        assert db.whitelist('price; DROP TABLE t', ['name', 'price'], 'name') == 'name'
        assert db.whitelist('x', ['name']) is None

    def test_filter_fields(self, db):
        data = {'name': 'ana', 'is_admin': 1, 'email': 'a@b.c'}
        assert db.filter_fields(data, ['name', 'email']) == {'name': 'ana', 'email': 'a@b.c'}
        assert db.filter_array(data, []) == {}
