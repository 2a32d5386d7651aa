"""JSON key → identifier conversion.

Keys are converted to UpperCamelCase. Any character that is neither a letter
nor a digit is a separator: it is dropped and capitalizes the next letter.
A digit also starts a new word. Existing capitals are kept.

    foo_bar, foo-bar, fooBar -> FooBar
    user_ID                  -> UserID
    foo1bar                  -> Foo1Bar

The result is not guaranteed to be a valid identifier in every target
(it may be empty or start with a digit); renderers check that.
"""

from __future__ import annotations


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def to_identifier(key: str) -> str:
    out = []
    cap_next = True
    for ch in key:
        if ch.isalpha():
            out.append(ch.upper() if cap_next else ch)
            cap_next = False
        elif _is_digit(ch):
            out.append(ch)
            cap_next = True
        else:
            cap_next = True
    return "".join(out)
