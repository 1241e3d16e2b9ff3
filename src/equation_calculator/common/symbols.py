"""Character classes recognised in an equation."""

# ASCII only: str.isdigit() would also accept superscripts and other scripts
DIGITS: frozenset = frozenset("0123456789")
DECIMAL_POINT: str = "."
OPERATOR_SYMBOLS: frozenset = frozenset("+-*/")


def is_number_char(ch: str) -> bool:
    """Return True for characters that belong to a number literal (digits and the decimal point)."""
    return ch in DIGITS or ch == DECIMAL_POINT


def is_operator(ch: str) -> bool:
    """Return True for one of the four binary operator symbols."""
    return ch in OPERATOR_SYMBOLS

# Unicode White_Space; str.isspace() also accepts the \x1c-\x1f separators, which are not whitespace here
WHITESPACE: str = (
    "\t\n\x0b\x0c\r \x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)


def is_whitespace(ch: str) -> bool:
    """Return True for whitespace characters, which separate tokens and are otherwise ignored."""
    return ch in WHITESPACE
