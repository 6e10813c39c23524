"""
Publish generated API documentation to Confluence wiki.

Copyright 2022-2026, Levente Hunyadi
"""

import unicodedata


def split_camel_case(text: str) -> list[str]:
    """
    Splits a string into runs of characters of the same Unicode category.

    An upper-case letter followed by lower-case letters starts a new token, such that `"ASFRules"` yields `"ASF"` and `"Rules"`.

    :param text: Text to split.
    :returns: Tokens whose concatenation reproduces the input.
    """

    if not text:
        return []

    tokens: list[str] = []
    token_start = 0
    current_type = unicodedata.category(text[0])
    for pos in range(1, len(text)):
        char_type = unicodedata.category(text[pos])
        if char_type == current_type:
            continue

        if char_type == "Ll" and current_type == "Lu":
            # upper-case letter preceding a lower-case run belongs to that run
            new_token_start = pos - 1
            if new_token_start != token_start:
                tokens.append(text[token_start:new_token_start])
                token_start = new_token_start
        else:
            tokens.append(text[token_start:pos])
            token_start = pos
        current_type = char_type

    tokens.append(text[token_start:])
    return tokens


def remove_extension(file_name: str) -> str:
    "Strips the text from the last period on, if the file name has an extension."

    base, sep, _ = file_name.rpartition(".")
    return base if sep else file_name


def page_title(file_name: str) -> str:
    """
    Converts a camel-case file name into a human-readable Confluence page title.

    ```
    page_title("cat.html") == "Cat"
    page_title("fooBar.wiki") == "Foo Bar"
    page_title("number5.cmd") == "Number 5"
    page_title("foo200Bar.confluence") == "Foo 200 Bar"
    page_title("ASFRules.html5") == "ASF Rules"
    page_title("ab:cd:ef.bat") == "Ab : cd : ef"
    ```

    :param file_name: File name with or without an extension.
    :returns: Title with words separated by a space and the first character capitalized.
    """

    title = " ".join(split_camel_case(remove_extension(file_name)))
    return f"{title[:1].upper()}{title[1:]}".strip()
