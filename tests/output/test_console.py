"""Tests for the Rich console factory."""

from rich.text import Text

from cssderive.output.console import CSSDERIVE_THEME, create_console, get_output


class TestConsole:
    def test_renders_to_buffer(self) -> None:
        console = create_console()
        console.print(Text("OK", style="css.ok"))
        assert get_output(console) == "OK\n"

    def test_theme_styles(self) -> None:
        for name in ("css.ok", "css.error", "css.op", "css.key", "css.ident"):
            assert name in CSSDERIVE_THEME.styles

    def test_width(self) -> None:
        assert create_console(width=40).width == 40
