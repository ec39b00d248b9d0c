"""Tests for Rich Console factory and theme."""

from io import StringIO

from intercast.output.console import INTERCAST_THEME, create_console, get_output, style_for_kind


class TestCreateConsole:
    def test_returns_console_with_stringio(self) -> None:
        assert isinstance(create_console().file, StringIO)

    def test_no_color_disables_ansi(self) -> None:
        console = create_console(no_color=True)
        console.print("[bold red]hello[/bold red]")
        output = get_output(console)
        assert "\x1b" not in output
        assert "hello" in output

    def test_custom_width(self) -> None:
        assert create_console(width=80).width == 80

    def test_default_width(self) -> None:
        assert create_console().width == 120

    def test_theme_styles_resolve(self) -> None:
        console = create_console()
        console.print("[ic.path]tags[2][/ic.path]")
        assert "tags[2]" in get_output(console)


class TestStyleForKind:
    def test_known_kinds(self) -> None:
        assert style_for_kind("missing") == "ic.kind.missing"
        assert style_for_kind("invalid") == "ic.kind.invalid"

    def test_unknown_kind(self) -> None:
        assert style_for_kind("too_small") == ""

    def test_kind_styles_in_theme(self) -> None:
        assert "ic.kind.missing" in INTERCAST_THEME.styles
        assert "ic.kind.invalid" in INTERCAST_THEME.styles
