"""
Tests for shortcode inventory and expansion.
"""

from corpus.shortcodes import (
    Shortcode,
    expand_shortcodes,
    find_shortcodes,
    parse_args,
    unbalanced_shortcodes,
)

BODY = """\
Intro.

{{% image alt="Spring Boot" src="images/arch.png" %}}

{{< youtube abc123 >}}

```text
{{% image src="inside-code.png" %}}
```

{{% info title="Heads up" %}}
Inner **text**.
{{% /info %}}
"""


class TestParseArgs:

    def test_named_and_positional(self):
        positional, named = parse_args(' "https://github.com/x" alt="A B" width=300')
        assert positional == ["https://github.com/x"]
        assert named == {"alt": "A B", "width": "300"}

    def test_unbalanced_quotes_fall_back_to_whitespace(self):
        positional, named = parse_args(' alt="oops')
        assert named == {"alt": '"oops'}
        assert positional == []


class TestFindShortcodes:

    def test_finds_all_outside_code(self):
        found = find_shortcodes(BODY)
        assert [(s.name, s.closing) for s in found] == [
            ("image", False),
            ("youtube", False),
            ("info", False),
            ("info", True),
        ]

    def test_line_numbers_count_code_blocks(self):
        found = {(s.name, s.closing): s.line for s in find_shortcodes(BODY)}
        assert found[("image", False)] == 3
        assert found[("info", False)] == 11
        assert found[("info", True)] == 13

    def test_args(self):
        image = find_shortcodes(BODY)[0]
        assert image.arg("src") == "images/arch.png"
        assert image.arg("alt") == "Spring Boot"
        assert image.arg("missing", default="x") == "x"
        youtube = find_shortcodes(BODY)[1]
        assert youtube.arg("id", 0) == "abc123"


class TestUnbalanced:

    def test_balanced(self):
        assert unbalanced_shortcodes(BODY) == []

    def test_unclosed_and_stray(self):
        body = "{{% info %}}\nopen\n\n{{% /warning %}}\n"
        found = unbalanced_shortcodes(body)
        assert [(s.name, s.closing, s.line) for s in found] == [("info", False, 1), ("warning", True, 4)]


class TestExpandShortcodes:

    def test_image(self):
        html = expand_shortcodes('{{% image alt="A <b>" src="images/a.png" %}}')
        assert html == '<img src="images/a.png" alt="A &lt;b&gt;">'

    def test_github(self):
        html = expand_shortcodes('{{% github "https://github.com/thombergs/code-examples" %}}')
        assert 'href="https://github.com/thombergs/code-examples"' in html
        assert "Example Code" in html

    def test_paired_callout_keeps_markdown_inside(self):
        out = expand_shortcodes(BODY)
        assert '<div class="info" markdown="1">' in out
        assert '<p class="info-title">Heads up</p>' in out
        assert "Inner **text**." in out
        assert "/info" not in out

    def test_code_blocks_untouched(self):
        out = expand_shortcodes(BODY)
        assert '{{% image src="inside-code.png" %}}' in out

    def test_unknown_left_verbatim(self):
        out = expand_shortcodes(BODY)
        assert "{{< youtube abc123 >}}" in out

    def test_custom_handlers(self):
        handlers = {"shout": lambda sc, inner: sc.arg("text", 0).upper()}
        assert expand_shortcodes('say {{% shout "hi" %}}', handlers) == "say HI"

    def test_shortcode_dataclass_defaults(self):
        sc = Shortcode(name="image")
        assert sc.positional == [] and sc.named == {} and not sc.closing

    def test_paired_name_must_match_whole_word(self):
        body = "{{% info-box %}}\nboxed\n{{% /info %}}\n"
        out = expand_shortcodes(body)
        assert '<div class="info"' not in out
        assert "{{% info-box %}}" in out
        assert "{{% /info %}}" in out

    def test_paired_name_without_spaces(self):
        out = expand_shortcodes("{{%tip%}}\nshort\n{{%/tip%}}\n")
        assert '<div class="tip" markdown="1">' in out
