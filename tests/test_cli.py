'''
Command line interface tests
'''

from io import StringIO

from precalc.cli import CLI, InteractiveInput

from pytest import fixture, raises


@fixture
def run():
    '''
    Run the CLI with args, returning (stdout, stderr) text.
    '''
    def run(*args):
        out, err = StringIO(), StringIO()
        CLI(out=out, err=err).run(args=list(args))
        return out.getvalue(), err.getvalue()
    return run


def test_expressions(run):
    assert run('-e', '1+2', '2^3^2') == ('3\n512\n', '')


def test_errors_do_not_stop_the_session(run):
    out, err = run('-e', '1/0', '2*3', '(1')
    assert out == '6\n'
    assert err == 'Division by zero\nMismatched parentheses\n'


def test_blank_lines_are_skipped(run):
    assert run('-e', '', '  ', '1') == ('1\n', '')


def test_precision(run):
    assert run('-k', '5', '-e', '1/3') == ('0.33333\n', '')


def test_angle_unit(run):
    assert run('-e', 'cos(180)') == ('-1\n', '')
    assert run('-a', 'rad', '-e', 'cos(0)') == ('1\n', '')


def test_locale_and_grouping(run):
    assert run('--locale', 'de_DE', '-g', '-e', '1234.5') == \
        ('1.234,5\n', '')


def test_coordinates(run):
    assert run('-e', 'Rec(2;90)') == ('x=0; y=2\n', '')


def test_dump(run):
    out, err = run('-D', '-e', '3+4*2', 'sin(30)')
    assert out.splitlines() == [
        '<tokens>\t<rpn>',
        "'3' '+' '4' '*' '2'\t3 4 2 */2 +/2",
        "'sin' '(' '30' ')'\t30 sin/1",
    ]
    assert err == ''


def test_dump_errors(run):
    out, err = run('-D', '-e', '1;2')
    assert out == '<tokens>\t<rpn>\n'
    assert err == 'Misplaced separator or mismatched parentheses\n'


def test_raw_grammar(run):
    out, err = run('-G', '-e')
    assert '(?<number>' in out
    assert '(?<symbol>' in out


def test_angle_unit_choices_are_spelled_as_typed(run, capsys):
    usage = CLI().argument_parser.format_usage()
    assert '{deg,rad}' in usage
    with raises(SystemExit):
        run('-a', 'grad', '-e', '1')
    err = capsys.readouterr().err
    assert 'deg' in err
    assert 'AngleUnit' not in err


class ScriptedSession:
    '''
    Stands in for prompt_toolkit's PromptSession, replaying fixed input.
    '''
    LINES = ['1+1', KeyboardInterrupt, '2^10']

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.lines = iter(self.LINES)

    def prompt(self):
        line = next(self.lines, EOFError)
        if isinstance(line, type):
            raise line
        return line


def test_prompt(run, monkeypatch):
    monkeypatch.setattr('precalc.cli.PromptSession', ScriptedSession)
    assert run('-p', '>> ') == ('2\n1024\n', '')
    assert [line for line in InteractiveInput('? ')] == ['1+1', '2^10']
