from cloudru_mcp.PARSERS.env_parser import EnvParser, split_comma_list


def test_parse_from_string():
    env = EnvParser.parse_from_string("KEY1='VALUE1';KEY2='two words'")
    assert [(v.name, v.value, v.type) for v in env] == [
        ("KEY1", "VALUE1", "plain"),
        ("KEY2", "two words", "plain"),
    ]


def test_parse_keeps_equals_in_value():
    env = EnvParser.parse_from_string("DSN='host=db port=5432'")
    assert env[0].name == "DSN"
    assert env[0].value == "host=db port=5432"


def test_parse_unquoted_and_whitespace():
    env = EnvParser.parse_from_string(" A = 1 ; B='x'")
    assert [(v.name, v.value) for v in env] == [("A", "1"), ("B", "x")]


def test_parse_skips_malformed_entries():
    env = EnvParser.parse_from_string("novalue;='orphan';;C='3'")
    assert [(v.name, v.value) for v in env] == [("C", "3")]


def test_parse_single_quote_is_not_stripped():
    env = EnvParser.parse_from_string("Q='")
    assert env[0].value == "'"


def test_parse_empty():
    assert EnvParser.parse_from_string("") == []


def test_split_comma_list():
    assert split_comma_list("python, app.py") == ["python", "app.py"]
    assert split_comma_list("") == []
    assert split_comma_list("a,,b") == ["a", "", "b"]
