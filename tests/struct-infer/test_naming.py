import pytest
from struct_infer.naming import to_identifier


@pytest.mark.parametrize(
    "key,expected",
    [
        ("foo_bar", "FooBar"),
        ("foo-bar", "FooBar"),
        ("fooBar", "FooBar"),
        ("FooBar", "FooBar"),
        ("id", "Id"),
        ("user_ID", "UserID"),
        ("foo1bar", "Foo1Bar"),
        ("a b.c", "ABC"),
        ("__private", "Private"),
        ("foo@bar", "FooBar"),
        ("ünïcode_key", "ÜnïcodeKey"),
    ],
)
def test_to_identifier(key, expected):
    assert to_identifier(key) == expected


def test_equivalent_spellings_collide():
    assert len({to_identifier(k) for k in ("foo_bar", "foo-bar", "fooBar")}) == 1


@pytest.mark.parametrize("key", ["", "_", "--", "$"])
def test_separator_only_keys_convert_to_empty(key):
    assert to_identifier(key) == ""


def test_digit_prefixed_key_is_kept_verbatim():
    # Leading digits survive; renderers reject the identifier later
    assert to_identifier("123") == "123"
    assert to_identifier("1st_place") == "1StPlace"
