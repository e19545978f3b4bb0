"""Unit tests for string escaping and identifier quoting."""

from db_access.sql.identifiers import backtick, quote_identifier, sql_fix, sql_unfix


class TestSqlFix:
    """Test escaping of string literal content."""

    def test_quotes_are_escaped(self):
        """Test that single and double quotes get a backslash."""
        assert sql_fix("O'Brien") == "O\\'Brien"
        assert sql_fix('say "hi"') == 'say \\"hi\\"'

    def test_control_characters_are_escaped(self):
        """Test backslash, NUL, newline, carriage return and Ctrl-Z."""
        assert sql_fix("a\\b") == "a\\\\b"
        assert sql_fix("a\x00b") == "a\\0b"
        assert sql_fix("line1\nline2\r") == "line1\\nline2\\r"
        assert sql_fix("\x1a") == "\\Z"

    def test_non_strings_are_stringified(self):
        """Test that None becomes empty and numbers are converted."""
        assert sql_fix(None) == ""
        assert sql_fix(42) == "42"

    def test_unfix_reverses_fix(self):
        """Test that sql_unfix strips the escaping again."""
        original = "It's a \"test\"\\path\nnext\x00"
        assert sql_unfix(sql_fix(original)) == original

    def test_unfix_plain_text(self):
        """Test that text without backslashes is unchanged."""
        assert sql_unfix("plain text") == "plain text"


class TestQuoteIdentifier:
    """Test table and column identifier quoting."""

    def test_plain_names_stay_unquoted(self):
        """Test that simple alphanumeric names are not quoted."""
        assert quote_identifier("users") == "users"
        assert quote_identifier("Table2") == "Table2"

    def test_special_names_are_quoted(self):
        """Test names with spaces, underscores or a leading digit."""
        assert quote_identifier("user data") == "`user data`"
        assert quote_identifier("first_name") == "`first_name`"
        assert quote_identifier("2fa") == "`2fa`"

    def test_dotted_names_are_quoted_per_segment(self):
        """Test that each segment of a qualified name is handled alone."""
        assert quote_identifier("shop.order items") == "shop.`order items`"
        assert quote_identifier("u.*") == "u.*"

    def test_quote_characters_are_escaped(self):
        """Test that quotes inside a name are escaped before quoting."""
        assert quote_identifier("it's") == "`it\\'s`"

    def test_backtick_always_quotes(self):
        """Test the unconditional variant used by the statement builders."""
        assert backtick("Employee") == "`Employee`"
        assert backtick("a'b") == "`a\\'b`"
