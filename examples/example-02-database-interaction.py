#!/usr/bin/env python3
#
# This script runs a parameterized query on a Postgres server.
#
# Requirements: a running Postgres instance with a connect file (.psycopg_connection) in the current working directory,
# or the standard PG* environment variables.
#

import sqltag as st
from sqltag import db

conn = db.connect()

# The catalog tables are available on every Postgres server
query = st.sql(
    ["SELECT ", " FROM pg_catalog.pg_tables WHERE schemaname = ", " LIMIT ", ""],
    st.join([st.identifier("schemaname"), st.identifier("tablename")]),
    "pg_catalog",
    5,
)

for row in db.execute(conn, query, verbose=True):
    print(row)

# Results can also be loaded directly into a data frame
df = db.fetch_df(conn, query)
print(df)

conn.close()
