"""Tests for the inlineable markers and the classification of interpolated values."""
from __future__ import annotations

import types
import unittest

import sqltag as st
from sqltag import InterpolationKind


class IdentifierTests(unittest.TestCase):
    def test_plain_identifier(self) -> None:
        ident = st.identifier("users")
        self.assertEqual(ident.value, "users")
        self.assertEqual(ident.to_sql(), '"users"')

    def test_quote_escaping(self) -> None:
        self.assertEqual(st.identifier('table"name').value, 'table""name')
        self.assertEqual(st.identifier('tab"le"name').value, 'tab""le""name')
        self.assertEqual(st.identifier('col""umn').to_sql(), '"col""""umn"')

    def test_malicious_identifier(self) -> None:
        ident = st.identifier('users"; DROP TABLE admin; --')
        self.assertEqual(ident.to_sql(), '"users""; DROP TABLE admin; --"')

    def test_rejects_non_strings(self) -> None:
        for value in (123, None, b"users", ["users"]):
            with self.subTest("Non-string identifier", value=value):
                with self.assertRaises(st.InvalidArgumentError):
                    st.identifier(value)

    def test_rejects_empty_strings(self) -> None:
        with self.assertRaises(st.InvalidArgumentError):
            st.identifier("")

    def test_error_hierarchy(self) -> None:
        self.assertRaises(ValueError, st.identifier, "")
        self.assertRaises(TypeError, st.identifier, 42)

    def test_accepts_postgres_names(self) -> None:
        for name in ("users", "user_table", "_private_table", "$special_table", "table123", "MyTable"):
            with self.subTest("Valid identifier", name=name):
                self.assertEqual(st.identifier(name).to_sql(), f'"{name}"')


class RawTests(unittest.TestCase):
    def test_strings_are_kept_as_is(self) -> None:
        self.assertEqual(st.raw("ASC").value, "ASC")
        self.assertEqual(st.raw("").value, "")
        self.assertEqual(st.raw("'; --").to_sql(), "'; --")

    def test_numbers_are_stringified(self) -> None:
        self.assertEqual(st.raw(42).value, "42")
        self.assertEqual(st.raw(0).value, "0")
        self.assertEqual(st.raw(-123).value, "-123")
        self.assertEqual(st.raw(3.14).value, "3.14")


class LiteralTests(unittest.TestCase):
    def test_plain_literal(self) -> None:
        lit = st.literal("hello")
        self.assertEqual(lit.value, "hello")
        self.assertEqual(lit.to_sql(), "'hello'")

    def test_quote_escaping(self) -> None:
        self.assertEqual(st.literal("it's").value, "it''s")
        self.assertEqual(st.literal("'; DROP TABLE users; --").to_sql(), "'''; DROP TABLE users; --'")

    def test_double_quotes_are_untouched(self) -> None:
        self.assertEqual(st.literal('say "hi"').value, 'say "hi"')


class MarkerValueTests(unittest.TestCase):
    def test_equality(self) -> None:
        self.assertEqual(st.identifier("a"), st.identifier("a"))
        self.assertNotEqual(st.identifier("a"), st.raw("a"))
        self.assertNotEqual(st.literal("a"), st.raw("a"))
        self.assertEqual(len({st.raw("a"), st.raw("a"), st.literal("a")}), 2)

    def test_string_representation(self) -> None:
        self.assertEqual(str(st.identifier("users")), '"users"')
        self.assertEqual(repr(st.literal("it's")), "Literal(\"it''s\")")


class ClassificationTests(unittest.TestCase):
    def test_markers(self) -> None:
        self.assertEqual(st.classify(st.identifier("users")), InterpolationKind.Identifier)
        self.assertEqual(st.classify(st.raw("ASC")), InterpolationKind.Raw)
        self.assertEqual(st.classify(st.literal("abc")), InterpolationKind.Literal)

    def test_fragments(self) -> None:
        self.assertEqual(st.classify(st.sql("SELECT 1")), InterpolationKind.Fragment)

        fragment_lookalike = types.SimpleNamespace(segments=["a = ", ""], params=[1])
        self.assertEqual(st.classify(fragment_lookalike), InterpolationKind.Fragment)

    def test_opaque_values(self) -> None:
        opaque_values = [1, 3.14, "users", None, True, False, b"\x00\x01", [1, 2], {"a": 1}, object()]
        for value in opaque_values:
            with self.subTest("Opaque value", value=value):
                self.assertEqual(st.classify(value), InterpolationKind.Opaque)

    def test_partial_fragment_lookalike_is_opaque(self) -> None:
        self.assertEqual(st.classify(types.SimpleNamespace(segments=["a"])), InterpolationKind.Opaque)
        self.assertEqual(st.classify(types.SimpleNamespace(params=[1])), InterpolationKind.Opaque)


if __name__ == "__main__":
    unittest.main()
