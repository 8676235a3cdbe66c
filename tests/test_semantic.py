import pytest

from kairo.compiler import SemanticAnalyzer, SemanticErrorKind, SemanticErrors, check_semantics
from kairo.core import AssignStmt, Ident, Mutability, Program, SourceSpan, parse


def analyze(source: str, filename: str = "demo.kr") -> SemanticAnalyzer:
    analyzer = SemanticAnalyzer(source, filename)
    analyzer.analyze(parse(source, filename))
    return analyzer


def test_immutable_declaration():
    table = check_semantics(parse('x = 1\nprint("hello")'))
    assert table.as_dict() == {"x": Mutability.IMMUTABLE}


def test_mutable_declaration_and_mutation():
    source = '$x = 0\nx = x + 1\nprint("done")'
    table = check_semantics(parse(source), source)
    assert table.as_dict() == {"x": Mutability.MUTABLE}


def test_assignment_to_immutable_variable():
    analyzer = analyze("x = 1\nx = 2")
    assert len(analyzer.errors) == 1

    error = analyzer.errors[0]
    assert error.kind is SemanticErrorKind.ASSIGN_TO_IMMUTABLE
    assert error.name == "x"
    assert error.line == 2
    assert error.column == 1
    assert error.line_text == "x = 2"
    assert error.caret == "^"
    assert "immutable variable `x`" in error.summary


def test_undefined_variable_points_at_identifier():
    analyzer = analyze("y = z + 1")
    assert len(analyzer.errors) == 1

    error = analyzer.errors[0]
    assert error.kind is SemanticErrorKind.UNDEFINED_VARIABLE
    assert error.name == "z"
    assert error.line == 1
    assert error.column == 5
    assert error.caret == "    ^"
    assert "demo.kr:1:5" in str(error)


def test_duplicate_mutable_declaration():
    analyzer = analyze("$x = 1\n$x = 2")
    assert [e.kind for e in analyzer.errors] == [SemanticErrorKind.DUPLICATE_DECLARATION]
    error = analyzer.errors[0]
    assert error.line == 2
    assert error.column == 2
    assert error.caret == " ^"


def test_mutable_marker_after_immutable_declaration_is_duplicate():
    analyzer = analyze("x = 1\n$x = 2")
    assert [e.kind for e in analyzer.errors] == [SemanticErrorKind.DUPLICATE_DECLARATION]
    assert analyzer.symbol_table.mutability_of("x") is Mutability.IMMUTABLE


def test_mutability_never_overwritten():
    analyzer = analyze("$x = 1\nx = 2\n$x = 3\nx = 4")
    assert [e.kind for e in analyzer.errors] == [SemanticErrorKind.DUPLICATE_DECLARATION]
    assert analyzer.symbol_table.mutability_of("x") is Mutability.MUTABLE
    assert len(analyzer.symbol_table) == 1


def test_self_reference_before_declaration_is_undefined():
    analyzer = analyze("x = x + 1")
    assert [e.kind for e in analyzer.errors] == [SemanticErrorKind.UNDEFINED_VARIABLE]


def test_use_after_declaration_is_fine():
    analyzer = analyze('a = 1\nb = a + 2\nc = a + b + "s"')
    assert analyzer.errors == []
    assert list(analyzer.symbol_table) == ["a", "b", "c"]


def test_every_undefined_reference_is_reported():
    analyzer = analyze("y = p + q + p")
    assert [e.name for e in analyzer.errors] == ["p", "q", "p"]


def test_errors_are_aggregated_in_pass_order():
    source = "x = 1\nx = 2\ny = q\n$x = 3"
    analyzer = analyze(source)
    assert [(e.kind, e.line) for e in analyzer.errors] == [
        (SemanticErrorKind.ASSIGN_TO_IMMUTABLE, 2),
        (SemanticErrorKind.DUPLICATE_DECLARATION, 4),
        (SemanticErrorKind.UNDEFINED_VARIABLE, 3),
    ]


def test_check_semantics_raises_with_all_errors():
    source = "x = 1\nx = 2\ny = q"
    with pytest.raises(SemanticErrors) as e:
        check_semantics(parse(source), source, "demo.kr")
    assert len(e.value.errors) == 2
    text = str(e.value)
    assert "cannot assign twice to immutable variable `x`" in text
    assert "use of undefined variable `q`" in text


def test_print_statements_are_not_checked():
    analyzer = analyze('print("x = y")\nprint("z")')
    assert analyzer.errors == []
    assert len(analyzer.symbol_table) == 0


def test_suggestions_name_the_variable():
    analyzer = analyze("count = 1\ncount = 2")
    suggestions = analyzer.errors[0].diagnostic.suggestions
    assert "$count = 0" in suggestions
    assert "new_count" in suggestions


def test_undefined_identifier_is_relocated_in_line_text():
    source = "zz = 1\ny = zz + z"
    # recorded column is deliberately wrong
    ident = Ident("z", SourceSpan.single_line(2, 1, 2))
    program = parse(source)
    program.statements[1].value.right = ident

    analyzer = SemanticAnalyzer(source, "demo.kr")
    assert analyzer.analyze(program) is False
    error = analyzer.errors[0]
    assert error.name == "z"
    assert error.column == 10
    assert error.caret == " " * 9 + "^"


def test_analyzer_without_source_text():
    program = Program([
        AssignStmt("x", False, Ident("y", SourceSpan.single_line(1, 5, 6)),
                   SourceSpan.single_line(1, 1, 6), SourceSpan.single_line(1, 1, 2)),
    ])
    analyzer = SemanticAnalyzer()
    assert analyzer.analyze(program) is False
    assert analyzer.errors[0].column == 5
    assert analyzer.errors[0].line_text == ""
