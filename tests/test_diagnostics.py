from kairo.core.diagnostics import Diagnostic, caret_line, get_line
from kairo.core.span import SourceSpan
from kairo.utils.term import make_console, print_diagnostic, print_error, print_stage


def make_diagnostic(**overrides):
    fields = dict(
        summary="use of undefined variable `z`",
        filename="demo.kr",
        line=12,
        column=5,
        line_text="y = z + 1",
        caret="    ^",
        suggestions="   - declare `z` before this line",
    )
    fields.update(overrides)
    return Diagnostic(**fields)


def test_get_line():
    source = "a = 1\r\nb = 2\n"
    assert get_line(source, 1) == "a = 1"
    assert get_line(source, 2) == "b = 2"
    assert get_line(source, 9) == ""
    assert get_line(source, 0) == ""


def test_caret_line_width():
    assert caret_line(SourceSpan.single_line(1, 3, 6)) == "  ^^^"
    assert caret_line(SourceSpan.single_line(1, 1, 1)) == "^"


def test_plain_format():
    assert make_diagnostic().format() == (
        "error: use of undefined variable `z`\n"
        "  --> demo.kr:12:5\n"
        "   |\n"
        "12 | y = z + 1\n"
        "   |     ^\n"
        "help:\n"
        "   - declare `z` before this line"
    )


def test_format_without_suggestions():
    text = str(make_diagnostic(suggestions=""))
    assert "help:" not in text


def test_markup_escapes_source_text():
    markup = make_diagnostic(line_text="x = [bold]").format_markup()
    assert "x = \\[bold]" in markup


def test_print_diagnostic_renders_markup(capsys, monkeypatch):
    monkeypatch.delenv("KAIRO_MINIMAL_UI", raising=False)
    print_diagnostic(make_diagnostic(line_text="x = [red]"))
    err = capsys.readouterr().err
    assert "error: use of undefined variable `z`" in err
    assert "x = [red]" in err
    assert "--> demo.kr:12:5" in err


def test_print_error_minimal(capsys, monkeypatch):
    monkeypatch.setenv("KAIRO_MINIMAL_UI", "yes")
    print_error("boom [x]")
    assert capsys.readouterr().err.strip() == "[ERROR] boom [x]"


def test_empty_no_color_disables_color(monkeypatch):
    monkeypatch.setenv("NO_COLOR", "")
    assert make_console().no_color is True
    assert make_console(stderr=True).no_color is True


def test_color_without_no_color(monkeypatch):
    monkeypatch.delenv("NO_COLOR", raising=False)
    assert make_console().no_color is False


def test_print_stage_minimal(capsys, monkeypatch):
    monkeypatch.setenv("KAIRO_MINIMAL_UI", "1")
    print_stage(2, 4, "Semantic analysis")
    assert capsys.readouterr().out.strip() == "[2/4] Semantic analysis"
