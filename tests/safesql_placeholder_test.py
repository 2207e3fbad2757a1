"""
(C) Copyright 2026 The pysafesql Authors.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.

Materialization through Database.parse(); nothing here is executed.
"""

import re

import pytest

from pysafesql.exception import ArgumentTypeError, ArityMismatchError
from pysafesql.exception import EmptyIdentifierError, EmptySetError


class TestParse(object):

    def test_identifier_and_integer(self, db):
        assert db.parse("SELECT * FROM ?n WHERE id = ?i", "users", 5) \
            == "SELECT * FROM `users` WHERE id = 5"

    def test_in_list(self, db):
        assert db.parse("WHERE id IN (?a)", [1, 2, 3]) == "WHERE id IN ('1','2','3')"

    def test_empty_in_list(self, db):
        assert db.parse("WHERE id IN (?a)", []) == "WHERE id IN (NULL)"

    def test_set_list(self, db):
        assert db.parse("UPDATE ?n SET ?u WHERE id = ?i", "u",
                        {"name": "O'Neil", "age": 30}, 7) \
            == "UPDATE `u` SET `name`='O\\'Neil',`age`='30' WHERE id = 7"

    def test_null_string(self, db):
        assert db.parse("x = ?s", None) == "x = NULL"

    def test_null_integer(self, db):
        assert db.parse("x = ?i", None) == "x = NULL"

    def test_raw_fragment(self, db):
        where = db.parse("status = ?s", "active")
        assert db.parse("SELECT * FROM t WHERE ?p", where) \
            == "SELECT * FROM t WHERE status = 'active'"

    def test_raw_fragment_is_not_reparsed(self, db):
        # A ?s inside an already materialized literal stays literal text
        where = db.parse("name = ?s", "what?s this")
        assert db.parse("WHERE ?p AND id = ?i", where, 3) \
            == "WHERE name = 'what?s this' AND id = 3"

    def test_raw_fragment_none(self, db):
        with pytest.raises(ArgumentTypeError):
            db.parse("WHERE ?p", None)

    def test_argument_text_is_not_reparsed(self, db):
        assert db.parse("a = ?s AND b = ?s", "?i", "?n") == "a = '?i' AND b = '?n'"

    def test_unknown_placeholders_pass_through(self, db):
        assert db.parse("SELECT '?' , ?x, ?i", 1) == "SELECT '?' , ?x, 1"

    def test_no_recognised_tokens_remain(self, db):
        statement = db.parse("?n ?s ?i ?a ?u ?p", "t", "s", 1, [1], {'k': 'v'}, "raw")
        assert re.search(r'\?[nsiuap]', statement) is None

    def test_empty_identifier(self, db):
        with pytest.raises(EmptyIdentifierError):
            db.parse("SELECT ?n", "")

    def test_non_numeric_integer(self, db):
        with pytest.raises(ArgumentTypeError):
            db.parse("SELECT ?i", "abc")

    def test_arity_mismatch(self, db):
        with pytest.raises(ArityMismatchError) as ex:
            db.parse("a=?s AND b=?s", "x")
        assert (ex.value.got, ex.value.want) == (1, 2)

    def test_in_list_needs_sequence(self, db):
        with pytest.raises(ArgumentTypeError):
            db.parse("WHERE id IN (?a)", 5)

    def test_set_needs_mapping(self, db):
        with pytest.raises(ArgumentTypeError):
            db.parse("UPDATE t SET ?u", ['a'])

    def test_empty_set(self, db):
        with pytest.raises(EmptySetError):
            db.parse("UPDATE t SET ?u", {})

    def test_parse_does_not_execute(self, db, session):
        db.parse("DELETE FROM ?n", "users")
        assert session.statements == []
        assert db.last_query() is None
        assert db.stats() == []

    def test_percent_signs_are_literal(self, db):
        assert db.parse("WHERE name LIKE ?s", "%abc%") == "WHERE name LIKE '%abc%'"
