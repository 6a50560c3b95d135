"""Unit tests for xdl_web.messages module."""

from __future__ import annotations

from xdl_web.messages import (
    FormattedMessages,
    format_message,
    format_webpack_messages,
    is_likely_a_syntax_error,
    strip_ansi,
)


class TestFormatMessage:
    """Tests for format_message function."""

    def test_plain_message_unchanged(self) -> None:
        """Test a short message passes through."""
        assert format_message("Something went wrong") == "Something went wrong"

    def test_mapping_message_prefixed_with_module_name(self) -> None:
        """Test object diagnostics are prefixed with their module."""
        formatted = format_message(
            {"moduleName": "\x1b[1m./src/App.js\x1b[22m", "message": "Unexpected thing"}
        )
        assert formatted == "./src/App.js\nUnexpected thing"

    def test_mapping_message_without_module_name(self) -> None:
        """Test object diagnostics without a module keep their message."""
        assert format_message({"message": "Only a message"}) == "Only a message"

    def test_mapping_message_none(self) -> None:
        """Test a missing message text renders as empty, not as None."""
        assert format_message({"moduleName": "./src/App.js", "message": None}) == "./src/App.js"

    def test_loader_header_removed(self) -> None:
        """Test loader headers are stripped."""
        formatted = format_message(
            "./src/App.js\nModule Error (from ./node_modules/eslint-loader/index.js):\nReal error"
        )
        assert "Module Error" not in formatted
        assert formatted == "./src/App.js\nReal error"

    def test_parsing_error_becomes_syntax_error(self) -> None:
        """Test parser errors are shown as syntax errors with position."""
        formatted = format_message("./src/App.js\nLine 3:5:  Parsing error: Unexpected token")
        assert formatted == "./src/App.js\nSyntax error: Unexpected token (3:5)"

    def test_parsing_error_without_column(self) -> None:
        """Test parser errors without a column keep the line only."""
        formatted = format_message("./src/App.js\nLine 7:  Parsing error: Unterminated string")
        assert formatted == "./src/App.js\nSyntax error: Unterminated string (7)"

    def test_css_syntax_error_smooshed(self) -> None:
        """Test CSS syntax errors are folded onto one line."""
        formatted = format_message("./src/App.css\nSyntaxError (2:10) Unknown word\n\nmore")
        assert "Syntax error: Unknown word (2:10)" in formatted

    def test_named_export_not_found(self) -> None:
        """Test missing named exports are explained."""
        formatted = format_message(
            "./src/App.js\n\"export 'Button' was not found in './components'"
        )
        assert (
            "Attempted import error: 'Button' is not exported from './components'." in formatted
        )

    def test_default_export_not_found(self) -> None:
        """Test missing default exports are explained."""
        formatted = format_message(
            "./src/App.js\nexport 'default' (imported as 'Button') was not found in './Button'"
        )
        assert (
            "Attempted import error: './Button' does not contain a default export "
            "(imported as 'Button')." in formatted
        )

    def test_aliased_export_not_found(self) -> None:
        """Test missing aliased exports are explained."""
        formatted = format_message(
            "./src/App.js\nexport 'Btn' (imported as 'Button') was not found in './ui'"
        )
        assert (
            "Attempted import error: 'Btn' is not exported from './ui' (imported as 'Button')."
            in formatted
        )

    def test_blank_second_line_removed(self) -> None:
        """Test the blank line after the file name is dropped."""
        assert format_message("./src/App.js\n\nBroken\nthing") == "./src/App.js\nBroken\nthing"

    def test_file_position_stripped(self) -> None:
        """Test the position suffix on the file name line is removed."""
        assert format_message("./src/App.js 12:4-10\nBroken") == "./src/App.js\nBroken"

    def test_module_not_found_collapsed(self) -> None:
        """Test verbose module-not-found errors are reduced to two lines."""
        formatted = format_message(
            "./src/App.js\n"
            "Module not found: Error: Can't resolve './Missing' in '/app/src'\n"
            "resolve './Missing' in '/app/src'\n"
            "  using description file: /app/package.json"
        )
        assert formatted == "./src/App.js\nModule not found: Can't resolve './Missing' in '/app/src'"

    def test_cannot_find_file_simplified(self) -> None:
        """Test the Cannot find file prefix is simplified."""
        formatted = format_message(
            "./src/App.js\nModule not found: Cannot find file: 'x.js' does not match"
        )
        assert formatted == "./src/App.js\nCannot find file: 'x.js' does not match"

    def test_sass_hint_with_npm(self) -> None:
        """Test missing sass suggests installing it with npm."""
        formatted = format_message("./src/App.scss\nError: Cannot find module 'sass'")
        assert "To import Sass files, you first need to install sass." in formatted
        assert "npm install sass" in formatted

    def test_sass_hint_with_yarn(self) -> None:
        """Test missing sass suggests installing it with yarn."""
        formatted = format_message(
            "./src/App.scss\nError: Cannot find module 'sass'", use_yarn=True
        )
        assert "yarn add sass" in formatted
        assert "npm install" not in formatted

    def test_internal_stack_frames_removed(self) -> None:
        """Test node_modules frames are stripped but bundler frames kept."""
        formatted = format_message(
            "./src/App.js\n"
            "TypeError: boom\n"
            "    at Object.run (/app/node_modules/lib/index.js:10:5)\n"
            "    at webpack:///./src/App.js:3:1\n"
            "    at <anonymous>\n"
        )
        assert "node_modules" not in formatted
        assert "<anonymous>" not in formatted
        assert "webpack:///./src/App.js:3:1" in formatted

    def test_duplicate_blank_lines_collapsed(self) -> None:
        """Test consecutive blank lines are reduced to one."""
        formatted = format_message("./src/App.js\nfirst\n\n\n\nsecond")
        assert formatted == "./src/App.js\nfirst\n\nsecond"


class TestFormatWebpackMessages:
    """Tests for format_webpack_messages function."""

    def test_empty_stats(self) -> None:
        """Test a clean compile yields no messages."""
        messages = format_webpack_messages({"errors": [], "warnings": []})
        assert messages == FormattedMessages()
        assert messages.is_successful

    def test_missing_keys_treated_as_empty(self) -> None:
        """Test stats without diagnostic lists are handled."""
        assert format_webpack_messages({}).is_successful

    def test_errors_and_warnings_formatted(self) -> None:
        """Test both lists are formatted independently."""
        messages = format_webpack_messages(
            {"errors": ["./a.js 1:0-5\nbad"], "warnings": ["./b.js\n\nmeh\nreally"]}
        )
        assert messages.errors == ["./a.js\nbad"]
        assert messages.warnings == ["./b.js\nmeh\nreally"]
        assert not messages.is_successful

    def test_syntax_errors_hide_other_errors(self) -> None:
        """Test only syntax errors remain when one is present."""
        messages = format_webpack_messages(
            {
                "errors": [
                    "./a.js\nModule not found: Error: Can't resolve './b'",
                    "./c.js\nLine 1:1:  Parsing error: Unexpected token",
                ],
                "warnings": [],
            }
        )
        assert len(messages.errors) == 1
        assert is_likely_a_syntax_error(messages.errors[0])

    def test_warnings_only(self) -> None:
        """Test warnings without errors are not successful."""
        messages = format_webpack_messages({"errors": [], "warnings": ["careful"]})
        assert messages.errors == []
        assert messages.warnings == ["careful"]
        assert not messages.is_successful


class TestStripAnsi:
    """Tests for strip_ansi function."""

    def test_strips_color_codes(self) -> None:
        """Test ANSI color sequences are removed."""
        assert strip_ansi("\x1b[31mred\x1b[39m") == "red"
