from os import isatty
from sys import stdin, stdout, stderr, exit
from argparse import ArgumentParser, REMAINDER, OPTIONAL
import logging

from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory

from .calculator import Calculator
from .context import AngleUnit, EvalContext
from .tokens import TokenKind
from .util import CalcError


class InteractiveInput:
    '''
    Lines typed at a prompt_toolkit prompt, until end of file.

    Ctrl-C discards the line being typed; Ctrl-D ends the session.
    '''

    def __init__(self, prompt):
        self.prompt = prompt

    def __iter__(self):
        session = PromptSession(message=self.prompt,
                                history=InMemoryHistory(),
                                enable_suspend=True)
        while True:
            try:
                line = session.prompt()
            except EOFError:
                return
            except KeyboardInterrupt:
                continue
            yield line


class CLI:
    '''
    Command line interface to the calculator.
    '''

    DEFAULT_PROMPT = '> '

    def _calculator(self):
        context = EvalContext(precision=self.args.precision,
                              angle_unit=AngleUnit(self.args.angle_unit),
                              locale=self.args.locale)
        return Calculator(context)

    def _lines(self):
        for line in self.args.expressions:
            line = line.strip()
            if line:
                yield line

    def dumper(self):
        '''
        Dump tokens, then RPN with each symbol's arity.
        '''
        calculator = self._calculator()
        print('<tokens>\t<rpn>', file=self.out)
        for line in self._lines():
            try:
                tokens = calculator.tokenize(line)
                rpn = calculator.parser.to_postfix(
                    calculator.substitute(tokens, {}))
            except CalcError as e:
                print(e, file=self.err)
                continue
            print(' '.join(repr(token.text) for token in tokens),
                  ' '.join(self._describe(calculator, token)
                           for token in rpn),
                  sep='\t', file=self.out)

    @staticmethod
    def _describe(calculator, token):
        if token.kind is TokenKind.NUMBER:
            return token.text
        entry = calculator.registry.lookup(token.text)
        return '{}/{}'.format(token.text, entry.arity)

    def executor(self):
        '''
        Evaluate each expression, printing its result.
        '''
        calculator = self._calculator()
        for line in self._lines():
            # Abort the line, not the session.
            try:
                print(calculator.to_string(line, grouping=self.args.grouping),
                      file=self.out)
            except CalcError as e:
                print(e, file=self.err)

    def raw_grammar(self):
        '''
        Print current internally defined grammar.
        '''
        print(self._calculator().lexer.LEXEME, file=self.out)

    def _prompting_input(self):
        '''
        Where lines come from when no -e was given.

        A prompt when -p was passed or we are talking to a terminal on both
        ends; plain stdin when piped.
        '''
        if self.args.prompt or \
           isatty(stdin.fileno()) and isatty(stdout.fileno()):
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT)
        else:
            return stdin

    def __init__(self, out=None, err=None):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.out = stdout if out is None else out
        self.err = stderr if err is None else err
        self.argument_parser = ArgumentParser(
            description='Arbitrary precision calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true')
        self.argument_parser.add_argument('-k', '--precision', type=int,
                                          default=EvalContext.DEFAULT_PRECISION)
        default_unit = EvalContext.DEFAULT_ANGLE_UNIT
        self.argument_parser.add_argument('-a', '--angle-unit',
                                          choices=[unit.value
                                                   for unit in AngleUnit],
                                          default=default_unit.value,
                                          help='Unit of trigonometric '
                                               'arguments and results')
        self.argument_parser.add_argument('--locale',
                                          default=EvalContext.DEFAULT_LOCALE)
        self.argument_parser.add_argument('-g', '--grouping',
                                          action='store_true',
                                          help='Group digits in results')
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-e', '--expression',
                                       nargs=REMAINDER,
                                       dest='expressions')
        int_nonint_groups.add_argument('-p', '--prompt',
                                       nargs=OPTIONAL,
                                       const=self.DEFAULT_PROMPT)
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-G', '--raw-grammar',
                                       self.raw_grammar),
                                      ('-D', '--dump', self.dumper)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=stdin)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        logging.basicConfig(level=logging.DEBUG if self.args.verbose
                            else logging.WARNING)
        if self.args.expressions is stdin:
            self.args.expressions = self._prompting_input()
        try:
            self.args.action()
        except KeyboardInterrupt:
            exit(1)


def main():
    CLI().run()
