#!/usr/bin/env python
"""yardlib - The expression engine used by yard"""

# ---------------------------
#  The Process in a Nutshell
# ---------------------------
#
#             +------------+     +----------+     +------------+
# [input] >>> | tokenize() | >>> | to_rpn() | >>> | eval_rpn() | >>> [result]
#          |  +------------+  |  +----------+  |  +------------+  |
#          |                  |                |                  |
#        string         list of tokens   tokens in RPN          number

import math
import operator

DIGITS = '0123456789'
DECIMAL_POINT = '.'
WHITESPACE = ' \t\r\n\f\v'

# Scanner states
DEFAULT, IN_NUMBER = 'default', 'in-number'

class Number(float):
    """A number token. Remembers the text it was scanned from."""
    def __new__(cls, text, pos=None):
        self = float.__new__(cls, text)
        self.text = str(text)
        self.pos = pos
        return self

    def __repr__(self):
        return 'Number(%r)' % self.text

    def __str__(self):
        return self.text

class CalcError(ValueError):
    pass

class InvalidTokenError(CalcError):
    def __init__(self, char, pos):
        CalcError.__init__(self, "invalid character %r at position %d" % (char, pos))
        self.char = char
        self.pos = pos

class MismatchedParenthesesError(CalcError):
    pass

class MalformedExpressionError(CalcError):
    pass

class Operator(object):
    """The base class for operators.

    Do not instantiate this class directly; use create_operator_class()
    or one of the ready-made classes below.
    """
    symbol = None
    func = None

    def __init__(self, pos=None):
        if self.__class__ is Operator:
            raise NotImplementedError("Operator class is abstract; it cannot be called directly")
        self.pos = pos

    def __call__(self, a, b):
        """Apply the operator to its two operands."""
        return self.__class__.func(a, b)

    def __repr__(self):
        return self.__class__.__name__

    def __str__(self):
        return self.__class__.symbol

def create_operator_class(clsname, symbol_, func_):
    """Factory function for creating a new operator class."""
    class newop(Operator):
        symbol = symbol_
        func = staticmethod(func_) if func_ is not None else None
    newop.__name__ = clsname
    return newop

def divide(a, b):
    """True division that never raises.

    Dividing by zero gives an infinity signed by both operands, and 0/0
    (or nan/0) gives nan, the same as IEEE-754 floats.
    """
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return operator.truediv(a, b)

Addition       = create_operator_class('Addition',       '+', operator.add)
Subtraction    = create_operator_class('Subtraction',    '-', operator.sub)
Multiplication = create_operator_class('Multiplication', '*', operator.mul)
Division       = create_operator_class('Division',       '/', divide)

binary = {
    '+': Addition,
    '-': Subtraction,
    '*': Multiplication,
    '/': Division,
}

# Parentheses aren't operators, but the converter shuffles them around
# on the same stack. They have no func and no precedence.
LeftParenthesis = create_operator_class('LeftParenthesis', '(', None)
RightParenthesis = create_operator_class('RightParenthesis', ')', None)

symbols = dict(binary)
symbols['('] = LeftParenthesis
symbols[')'] = RightParenthesis

_precedence = {
    '+': 1,
    '-': 1,
    '*': 2,
    '/': 2,
}

def precedence(symbol):
    """Return the binding rank of a binary operator symbol.

    Higher binds tighter. Parentheses and unknown symbols have no rank.
    """
    try:
        return _precedence[str(symbol)]
    except KeyError:
        raise ValueError("%r has no precedence" % str(symbol))

def is_parenthesis(token):
    return isinstance(token, (LeftParenthesis, RightParenthesis))

def tokenize(s):
    """Convert a string into a list of tokens."""
    tokens = []
    state = DEFAULT
    start = 0
    buf = []

    def close_number():
        text = ''.join(buf)
        if text == DECIMAL_POINT:
            raise InvalidTokenError(DECIMAL_POINT, start)
        tokens.append(Number(text, start))
        del buf[:]

    for pos, char in enumerate(s):
        if state == IN_NUMBER:
            if char in DIGITS:
                buf.append(char)
                continue
            elif char == DECIMAL_POINT:
                if DECIMAL_POINT in buf:
                    raise InvalidTokenError(char, pos)
                buf.append(char)
                continue
            # Anything else ends the number, then gets scanned as usual
            close_number()
            state = DEFAULT

        if char in DIGITS or char == DECIMAL_POINT:
            state = IN_NUMBER
            start = pos
            buf.append(char)
        elif char in WHITESPACE:
            pass
        elif char in symbols:
            tokens.append(symbols[char](pos))
        else:
            raise InvalidTokenError(char, pos)

    if state == IN_NUMBER:
        close_number()
    return tokens

def to_rpn(tokens):
    """Convert a list of tokens to reverse Polish notation using the
    shunting yard algorithm.

    See <http://en.wikipedia.org/wiki/Shunting_yard_algorithm>
    """
    # Output, in reverse Polish order
    out = []
    # Operator stack
    stack = []

    for token in tokens:

        # Number
        if isinstance(token, Number):
            # Write directly to output
            out.append(token)

        # Left bracket
        elif isinstance(token, LeftParenthesis):
            # Push onto the stack
            stack.append(token)

        # Right bracket
        elif isinstance(token, RightParenthesis):
            # Pop off operators, appending them to the output, until we hit a left bracket
            try:
                while not isinstance(stack[-1], LeftParenthesis):
                    out.append(stack.pop())
            except IndexError:
                raise MismatchedParenthesesError(
                    "unmatched ')' at position %s" % token.pos)
            else:
                stack.pop() # the left parenthesis

        # Other operators
        elif isinstance(token, Operator):
            # Pop off operators that bind at least as tightly. A left
            # bracket on top of the stack stops the search; it is never
            # ranked against anything.
            while (stack
                   and not isinstance(stack[-1], LeftParenthesis)
                   and precedence(token) <= precedence(stack[-1])):
                out.append(stack.pop())
            # Then push the current operator onto the stack
            stack.append(token)

        else:
            raise TypeError("found foreign object: %r" % (token,))

    # Finally, pop off anything still on the stack
    while stack:
        op = stack.pop()
        if isinstance(op, LeftParenthesis):
            raise MismatchedParenthesesError(
                "unmatched '(' at position %s" % op.pos)
        out.append(op)

    return out

def eval_rpn(tokens):
    """Evaluate a list of tokens in reverse Polish order."""
    stack = []

    for token in tokens:
        if isinstance(token, Number):
            stack.append(float(token))
        elif is_parenthesis(token):
            raise MalformedExpressionError(
                "parenthesis %r cannot appear in postfix" % str(token))
        elif isinstance(token, Operator):
            if len(stack) < 2:
                raise MalformedExpressionError("not enough values for %s" % token)
            b = stack.pop()
            a = stack.pop()
            stack.append(token(a, b))
        else:
            raise TypeError("found alien object: %r" % (token,))

    # At the end of the computation, there should be exactly one value
    # left on the stack
    if not stack:
        raise MalformedExpressionError("nothing to evaluate")
    elif len(stack) != 1:
        raise MalformedExpressionError(
            "%d values left over; missing an operator?" % len(stack))
    return stack[0]

def format_rpn(tokens):
    """Render a token list as space-separated text, e.g. '2 3 4 * +'."""
    return ' '.join(str(token) for token in tokens)

class Calculator(object):
    """Runs expressions through the whole pipeline.

    The token buffers of the expression in flight live on the instance
    and are emptied after every call, successful or not, so one
    Calculator can be reused indefinitely. Give each thread its own.
    """

    def __init__(self):
        self.tokens = []
        self.rpn = []

    def reset(self):
        self.tokens = []
        self.rpn = []

    def postfix(self, s):
        """Return the tokens of `s` in reverse Polish order."""
        try:
            self.tokens = tokenize(s)
            self.rpn = to_rpn(self.tokens)
            return list(self.rpn)
        finally:
            self.reset()

    def evaluate(self, s):
        """Evaluate the infix expression `s`."""
        try:
            self.tokens = tokenize(s)
            self.rpn = to_rpn(self.tokens)
            return eval_rpn(self.rpn)
        finally:
            self.reset()

def evaluate_expression(s):
    """Evaluate `s` with a throwaway Calculator."""
    return Calculator().evaluate(s)
