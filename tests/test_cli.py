'''
CLI tests, feeding expressions with -e.
'''

import io

from calcbrain import CLI


def run(capsys, *args):
    CLI().run(args=list(args))
    return capsys.readouterr()


def test_result_and_expression(capsys):
    out = run(capsys, '-e', '1 2 + 3 3 + ÷ ±').out
    assert out.splitlines() == ['±((1+2)÷(3+3)) =', '-0.5']


def test_one_display_per_line(capsys):
    out = run(capsys, '-e', '7 0', '/').out
    assert out.splitlines() == ['7,0', '0', '7÷0 =', 'Division by zero']


def test_memory(capsys):
    out = run(capsys, '-e', "7 'M' + √", '9 >', '<', '!', '\\M').out
    assert out.splitlines() == [
        '√(7+M) =', 'Variable not set',
        # > stores the displayed 9, not the failed √(7+M).
        '√(7+M),9', '9',
        '√(7+M) =', '4',
        'Empty stack',
        'M', '9',
    ]


def test_clear_all(capsys):
    out = run(capsys, '-e', '3 >x @ \\x').out
    assert out.splitlines()[-2:] == ['x', 'Variable not set']


def test_bad_input_aborts_line(capsys):
    captured = run(capsys, '-e', '1 2 tan +', '+')
    assert captured.out.splitlines() == ['1,2', '2', '1+2 =', '3']
    assert "Couldn't lex tan +" in captured.err


def test_bad_variable_name(capsys):
    captured = run(capsys, '-e', "''")
    assert 'Bad variable name' in captured.err
    assert captured.out.splitlines() == ['Empty stack']


def test_stdin(capsys, monkeypatch):
    monkeypatch.setattr('sys.stdin', io.StringIO('2 v\n±\n'))
    out = run(capsys).out
    assert out.splitlines() == [
        '√(2) =', '1.4142135623730951',
        '±(√(2)) =', '-1.4142135623730951',
    ]


def test_dump(capsys):
    out = run(capsys, '-D', '-e', "1 sqrt 'M'").out
    assert out.splitlines() == [
        '[groups]\t<repr(lexeme)>\t<arity>',
        "number\t'1'\tNone",
        "operator\t'sqrt'\t1",
        "variable\t__variable__\t\"'M'\"\tNone",
    ]


def test_list_operators(capsys):
    out = run(capsys, '-L').out
    assert '÷\t2\t1' in out.splitlines()
    assert 'π\t0\t-' in out.splitlines()
    assert 'v\t=\t√' in out.splitlines()


def test_raw_grammar(capsys):
    assert '(?<number>' in run(capsys, '-G').out
