import pytest

from grolang.ast import Assignment, Block, Call, Declaration, Identifier, Literal
from grolang.environment import Environment
from grolang.errors import ErrorKind, LangError
from grolang.parser import assignment_target, parse
from grolang.types import NULL, BoolVal, FloatVal, IntVal, StrVal, SymbolVal


@pytest.fixture
def env():
    env = Environment()
    env.declare_and_assign('someInt', IntVal(1))
    return env


def evaluate(source, env):
    return parse(source).eval(env).value


def read(source):
    return parse(source).debug_string()


def test_integer_literals(env):
    assert evaluate('0', env) == 0
    assert evaluate('2', env) == 2
    assert evaluate('-3', env) == -3
    assert evaluate('12345678912', env) == 12345678912
    assert evaluate('12_345_678_912', env) == 12345678912
    assert evaluate('-1200_0', env) == -12000


def test_integer_literal_out_of_range():
    assert parse('9223372036854775807') == Literal(IntVal(2 ** 63 - 1), 'Int')
    with pytest.raises(LangError) as info:
        parse('9223372036854775808')
    assert info.value.kind == ErrorKind.SYNTAX_ERROR


def test_decimal_literals(env):
    assert evaluate('1.2', env) == 1.2
    assert evaluate('.01', env) == 0.01
    assert evaluate('-1.', env) == -1.0
    assert evaluate('12.340e10', env) == 1.234e11
    assert evaluate('12.340E10', env) == 1.234e11
    assert evaluate('-1.E10', env) == -1.0e10
    assert parse('3.0') == Literal(FloatVal(3.0), 'Float')


def test_other_literals(env):
    assert parse('true').eval(env) == BoolVal(True)
    assert parse('false').eval(env) == BoolVal(False)
    assert parse('null').eval(env) == NULL
    assert parse('"some string"').eval(env) == StrVal('some string')
    assert parse(r'"say \"hi\""').eval(env) == StrVal('say "hi"')
    assert parse("'Hello").eval(env) == SymbolVal('Hello')


def test_literal_printable_form_reads_back(env):
    for text in ('42', '-7', '1.5', 'true', 'false', 'null', '"abc"', "'sym",
                 r'"a\"b"', r'"back\\slash"', r'"tab\there"'):
        value = parse(text).eval(env)
        assert read(text) == text
        assert parse(read(text)).eval(env) == value


def test_identifier(env):
    assert parse('someInt') == Identifier('someInt')
    assert evaluate('someInt', env) == 1
    assert read('someInt') == "'someInt"


def test_declaration():
    assert parse('val anInt: Int') == Declaration('anInt', 'Int', False)
    assert read('val anInt :Int') == "declare('anInt,'Int,false)"
    assert read('var aFloat :Float') == "declare('aFloat,'Float,true)"


def test_assignment():
    assert parse('x = 3') == Assignment('x', Literal(IntVal(3), 'Int'))
    assert read('x = 3') == "assign('x, 3)"
    assert read('x = y') == "assign('x, 'y)"


def test_declaration_with_initializer_is_a_block():
    node = parse('val myBool = true')
    assert node == Block((Declaration('myBool', 'Bool', False),
                          Assignment('myBool', Literal(BoolVal(True), 'Bool'))))
    assert read('val myBool = true') == "{declare('myBool,'Bool,false); assign('myBool, true)}"
    assert read('var s: Str = "a"') == "{declare('s,'Str,true); assign('s, \"a\")}"


def test_function_call():
    assert parse('print(a, 1, true)') == Call('print', (Identifier('a'), Literal(IntVal(1), 'Int'),
                                                      Literal(BoolVal(True), 'Bool')))
    assert read('print(a, 1, true)') == "print('a,1,true)"
    assert read('read()') == 'read()'
    assert read('print(str(1))') == 'print(str(1))'


def test_type_inference(env):
    assert evaluate('val inferInt = 3', env) == 3
    assert evaluate('val inferFloat = 3.0', env) == 3.0
    assert evaluate('val inferBool = true', env) == True
    assert evaluate("val inferSymbol = 'abc", env) == 'abc'
    assert env.get_symbol('inferFloat').declared_type.name == 'Float'
    assert env.get_symbol('inferSymbol').declared_type.name == 'Symbol'


def test_type_mismatch_in_declaration():
    with pytest.raises(LangError) as info:
        parse('val badInt :Int = true')
    assert info.value.kind == ErrorKind.TYPE_ERROR
    assert str(info.value) == 'Declared type is :Int whereas value is :Bool'


def test_type_cannot_be_inferred():
    for source in ('val x = someInt', 'val x = null', 'var x = print(1)'):
        with pytest.raises(LangError) as info:
            parse(source)
        assert info.value.kind == ErrorKind.TYPE_NOT_INFERRED
        assert info.value.arguments == ('x',)


def test_explicit_type_with_unknown_initializer(env):
    assert evaluate('val copy: Int = someInt', env) == 1


def test_invalid_string_escapes():
    for source in (r'print("\x")', r'val s = "\N"', r'"\u12"'):
        with pytest.raises(LangError) as info:
            parse(source)
        assert info.value.kind == ErrorKind.SYNTAX_ERROR, source


def test_decimal_literal_out_of_range():
    assert parse('1e308') == Literal(FloatVal(1e308), 'Float')
    with pytest.raises(LangError) as info:
        parse('1e999')
    assert info.value.kind == ErrorKind.SYNTAX_ERROR


def test_unknown_character():
    with pytest.raises(LangError) as info:
        parse('x = @')
    assert info.value.kind == ErrorKind.UNKNOWN_TOKEN


def test_syntax_errors():
    for source in ('', '   ', 'val', 'val x', 'x =', 'print(1,', '1 2', 'val x: Int = '):
        with pytest.raises(LangError) as info:
            parse(source)
        assert info.value.kind == ErrorKind.SYNTAX_ERROR, source


def test_keywords_are_not_identifiers():
    assert parse('valx') == Identifier('valx')
    assert parse('nullable') == Identifier('nullable')
    assert parse('true_') == Identifier('true_')


def test_assignment_target():
    assert assignment_target('x = 3') == 'x'
    assert assignment_target('  total=1') == 'total'
    assert assignment_target('val x = 3') is None
    assert assignment_target('x == 3') is None
    assert assignment_target('print(x)') is None
