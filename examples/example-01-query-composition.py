#!/usr/bin/env python3
#
# This script shows how queries are assembled from fragments. It does not need a database connection, the final queries
# are just printed.
#

import sqltag as st

# Step 1: simple parameters
# All plain values become parameters, the query text only contains placeholders for them
user_id = 42
query = st.sql(["SELECT * FROM users WHERE id = ", ""], user_id)
print(st.to_query(query))

# Step 2: identifiers and raw text
# Names of database objects are inlined as quoted identifiers. Raw text is inlined without any escaping, so it must never
# contain user input.
table, direction = "users", "DESC"
query = st.sql(["SELECT * FROM ", " ORDER BY created_at ", ""], st.identifier(table), st.raw(direction))
print(st.to_query(query))

# Step 3: composition
# Fragments can be nested and joined. The parameters of nested fragments are numbered automatically.
filters = {"name": "john", "city": "Dresden"}
predicates = [st.sql(["", " = ", ""], st.identifier(col), val) for col, val in filters.items()]
where_clause = st.join(predicates, st.sql(" AND "))
columns = st.join([st.identifier("id"), st.identifier("name")])

query = st.sql(["SELECT ", " FROM users"], columns)
if not st.is_empty(where_clause):
    query = st.sql(["", " WHERE ", ""], query, where_clause)

text, values = st.to_query(query)
print(text)
print(values)
