#!/usr/bin/env python
"""The yard calculator command-line interface"""

BANNER = """
                    yard -- A Shunting Yard Calculator
                               Version 1.0

               + - * / and parentheses.  'clear' resets.
"""

import argparse
import logging
import sys

import yardlib

def stderr(*args):
    print(*args, file=sys.stderr)

logger = logging.getLogger(__name__)

PROMPT = 'calc> '
RESET_COMMANDS = ('clear', 'reset')

def build_parser():
    parser = argparse.ArgumentParser(
        prog='yard',
        description="Evaluate arithmetic expressions with the shunting yard algorithm.")
    parser.add_argument('expressions', nargs='*', metavar='EXPR',
                        help="expression to evaluate; starts an interactive session if none are given")
    parser.add_argument('--rpn', action='store_true',
                        help="also print each expression in reverse Polish notation")
    parser.add_argument('-q', '--quiet', action='store_true',
                        help="don't print the banner")
    parser.add_argument('-v', '--verbose', action='store_true',
                        help="log tokens and postfix output")
    return parser

def run(calc, expr, show_rpn=False):
    """Evaluate one expression and print the result.

    Errors propagate to the caller.
    """
    verbose = logger.isEnabledFor(logging.DEBUG)
    if verbose:
        logger.debug("tokens: %r", yardlib.tokenize(expr))
    if show_rpn or verbose:
        rpn = yardlib.format_rpn(calc.postfix(expr))
        logger.debug("postfix: %s", rpn)
        if show_rpn:
            print('rpn:', rpn)
    res = calc.evaluate(expr)
    print('%.15g' % res)
    return res

def one_shot(calc, expressions, show_rpn=False):
    """Evaluate each expression in turn. Returns the exit status."""
    status = 0
    for expr in expressions:
        try:
            run(calc, expr, show_rpn)
        except yardlib.CalcError as ex:
            stderr('error:', ex)
            status = 1
    return status

def interactive(calc, show_rpn=False, quiet=False):
    if not quiet:
        stderr(BANNER)
    try:
        while True:
            try:
                expr = input(PROMPT).strip()
                if expr in RESET_COMMANDS:
                    calc.reset()
                    logger.debug("calculator reset")
                elif expr:
                    run(calc, expr, show_rpn)
            except yardlib.CalcError as ex:
                stderr('error:', ex)
    except EOFError:
        stderr('\ncaught EOF')
    except KeyboardInterrupt:
        stderr('\ninterrupted')
    return 0

def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    calc = yardlib.Calculator()
    if args.expressions:
        return one_shot(calc, args.expressions, args.rpn)
    return interactive(calc, args.rpn, args.quiet)

if __name__ == '__main__':
    sys.exit(main())
