import pytest

from grolang.environment import Environment
from grolang.errors import ErrorKind, ErrorVal
from grolang.types import (
    ANY, BOOL, CLASS, ERROR, FLOAT, FUNCTION, INT, NULL, STR, SYMBOL,
    BoolVal, ClassVal, FloatVal, IntVal, StrVal, SymbolVal,
    class_of, from_python, quote_string, to_display, to_string,
)


def test_class_of_literal_values():
    assert class_of(NULL) == ANY
    assert class_of(IntVal(3)) == INT
    assert class_of(FloatVal(3.0)) == FLOAT
    assert class_of(BoolVal(True)) == BOOL
    assert class_of(StrVal('a')) == STR
    assert class_of(SymbolVal('a')) == SYMBOL
    assert class_of(ErrorVal(ErrorKind.NOT_SET, ('x',))) == ERROR


def test_class_is_its_own_class():
    assert class_of(INT) == CLASS
    assert class_of(CLASS) is CLASS
    assert class_of(class_of(class_of(CLASS))) == CLASS


def test_function_class():
    env = Environment()
    assert class_of(env.get('print')) == FUNCTION


def test_printable_forms():
    assert to_string(NULL) == 'null'
    assert to_string(IntVal(-12)) == '-12'
    assert to_string(FloatVal(1.5)) == '1.5'
    assert to_string(FloatVal(3.0)) == '3.0'
    assert to_string(BoolVal(True)) == 'true'
    assert to_string(BoolVal(False)) == 'false'
    assert to_string(StrVal('some string')) == '"some string"'
    assert to_string(SymbolVal('Hello')) == "'Hello"
    assert to_string(INT) == 'Class(Int)'
    assert to_string(Environment().get('print')) == 'Function(name=print)'


def test_error_printable_form():
    err = ErrorVal(ErrorKind.NOT_DEFINED, ('foo',))
    assert to_string(err) == "Error(NOT_DEFINED: Variable 'foo is not defined)"


def test_display_strips_quotes_from_strings_only():
    assert to_display(StrVal('hi')) == 'hi'
    assert to_display(SymbolVal('hi')) == "'hi"
    assert to_display(IntVal(1)) == '1'


def test_int_must_fit_in_64_bits():
    IntVal(2 ** 63 - 1)
    IntVal(-(2 ** 63))
    with pytest.raises(OverflowError):
        IntVal(2 ** 63)
    with pytest.raises(TypeError):
        IntVal(True)


def test_values_compare_by_tag_and_content():
    assert IntVal(1) == IntVal(1)
    assert IntVal(1) != FloatVal(1.0)
    assert StrVal('a') != SymbolVal('a')
    assert ClassVal('Int') == INT


def test_python_conversions():
    assert from_python(None) == NULL
    assert from_python(True) == BoolVal(True)
    assert from_python(2) == IntVal(2)
    assert from_python(2.5) == FloatVal(2.5)
    assert from_python('s') == StrVal('s')
    with pytest.raises(TypeError):
        from_python([1])


def test_unknown_value_is_rejected():
    with pytest.raises(TypeError):
        class_of(3)
    with pytest.raises(TypeError):
        to_string(object())


def test_quote_string_escapes():
    assert quote_string('plain') == '"plain"'
    assert quote_string('a"b') == r'"a\"b"'
    assert quote_string('back\\slash') == r'"back\\slash"'
    assert quote_string('two\nlines\t!') == r'"two\nlines\t!"'
