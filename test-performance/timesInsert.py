# Needs a MySQL database; settings are read from DB_* (see README.rst)

import time

import pysafesql

smallIterations = 100
largeIterations = smallIterations * 100
batchSize = 1000

TABLE = 'perf_test'


def gettime():
    return time.time()


def insert(count):
    for i in range(count):
        db.query("INSERT INTO ?n (a, b) VALUES (?i, ?s)", TABLE, i, 'A')


def insert_batch(count):
    for base in range(0, count, batchSize):
        db.insert_batch(TABLE, [{'a': i, 'b': 'A'}
                                for i in range(base, min(base + batchSize, count))])


def select():
    return db.get_all("SELECT * FROM ?n", TABLE)


def recreate():
    db.query("DROP TABLE IF EXISTS ?n", TABLE)
    db.query("CREATE TABLE ?n (a INT, b CHAR(1))", TABLE)


db = pysafesql.connect()

# Begin SMALL_INSERT_ITERATIONS test
recreate()
start = gettime()
insert(smallIterations)
smallInsertElapsed = gettime() - start
print("Elapse time of SMALL_INSERT_ITERATIONS = %.4fs" % (smallInsertElapsed))

# Begin SMALL_SELECT_ITERATIONS test
start = gettime()
select()
smallSelectElapsed = gettime() - start
print("Elapse time of SMALL_SELECT_ITERATIONS = %.4fs" % (smallSelectElapsed))

# Begin LARGE_INSERT_ITERATIONS test
recreate()
start = gettime()
insert(largeIterations)
largeInsertElapsed = gettime() - start
print("Elapse time of LARGE_INSERT_ITERATIONS = %.4fs" % (largeInsertElapsed))

# Begin LARGE_BATCH_INSERT test
recreate()
start = gettime()
insert_batch(largeIterations)
batchInsertElapsed = gettime() - start
print("Elapse time of LARGE_BATCH_INSERT = %.4fs" % (batchInsertElapsed))

# Begin LARGE_SELECT_ITERATIONS test
start = gettime()
select()
largeSelectElapsed = gettime() - start
print("Elapse time of LARGE_SELECT_ITERATIONS = %.4fs" % (largeSelectElapsed))

if largeInsertElapsed > smallInsertElapsed * 100:
    print("Insert is too slow!")

if batchInsertElapsed > largeInsertElapsed:
    print("Batch insert is slower than single inserts!")

if largeSelectElapsed > smallSelectElapsed * 100:
    print("Select is too slow!")

total = sum(s.elapsed for s in db.stats())
print("Last %d statements took %.4fs" % (len(db.stats()), total))

db.query("DROP TABLE IF EXISTS ?n", TABLE)
db.close()

print("\n")
