"""Tests for publication parsing and categorization."""
import pytest

from homepage_data.publications import (
    BIBTEX,
    IN_PREPARATION,
    PUBLISHED,
    SUBMITTED,
    TEXT,
    Publication,
    categorize,
    detect_format,
    parse_bibtex,
    parse_key_value,
    parse_publications,
    year_key,
)


def _titles(pubs):
    return [p.title for p in pubs]


@pytest.mark.parametrize("parse", [parse_bibtex, parse_key_value, parse_publications])
def test_empty_input_yields_three_empty_lists(parse):
    result = parse("")
    assert result.in_preparation == []
    assert result.submitted == []
    assert result.published == []
    assert len(result) == 0


def test_bibtex_categories(bibtex_text):
    result = parse_bibtex(bibtex_text)

    assert _titles(result.in_preparation) == ["Lecture Notes on Control", "Work in Progress"]
    assert _titles(result.submitted) == ["A Submitted Manuscript"]
    assert _titles(result.published) == [
        "Optimal Feedback Control for High-Dimensional Systems",
        "Learning Value Functions",
    ]


def test_bibtex_skips_unknown_types_and_malformed_entries(bibtex_text):
    result = parse_bibtex(bibtex_text)
    keys = [p.citekey for _, pubs in result.items() for p in pubs]

    assert "verma2020thesis" not in keys
    assert "broken" not in keys
    assert len(result) == 5


def test_bibtex_fields(bibtex_text):
    pub = parse_bibtex(bibtex_text).published[0]

    assert pub.citekey == "verma2023control"
    assert pub.entrytype == "article"
    assert pub.author == "Verma, Deepanshu and Smith, John and Doe, Jane"
    assert pub.volume == "61"
    assert pub.number == "2"
    assert pub.pages == "100--120"
    assert pub.doi == "10.1137/22M1234567"
    assert pub.arxiv == "2201.01234"
    assert pub.video == ""


def test_bibtex_quoted_and_bare_values(bibtex_text):
    pub = parse_bibtex(bibtex_text).published[1]

    assert pub.title == "Learning Value Functions"
    assert pub.year == "2021"
    assert pub.booktitle == "Proceedings of the Conference on Decision and Control"
    assert pub.url == "https://example.org/cdc2021"


def test_bibtex_entry_type_and_field_names_are_case_insensitive():
    text = "@ARTICLE{key1,\n  TITLE = {Upper},\n  Year = {2020}\n}\n"
    pub = parse_bibtex(text).published[0]

    assert pub.entrytype == "article"
    assert pub.title == "Upper"
    assert pub.year == "2020"


def test_bibtex_multiline_value_is_collapsed():
    text = "@article{k,\n  title = {A title\n    spanning lines},\n  year = {2020}\n}"
    assert parse_bibtex(text).published[0].title == "A title spanning lines"


def test_bibtex_string_macro_does_not_swallow_next_entry():
    text = (
        '@string{siam = "SIAM J. Control"}\n'
        "\n"
        "@article{real2023, title = {Real Paper}, year = {2023}}\n"
    )
    result = parse_bibtex(text)
    assert _titles(result.published) == ["Real Paper"]
    assert result.published[0].citekey == "real2023"


def test_bibtex_trailing_comment_keeps_last_entry():
    text = (
        "@article{first, title = {First}, year = {2021}}\n"
        "\n"
        "@article{last,\n  title = {Last},\n  year = {2020}\n}\n"
        "% end of file\n"
    )
    assert _titles(parse_bibtex(text).published) == ["First", "Last"]


def test_bibtex_indented_entries():
    text = "  @article{a, title = {Indented}, year = {2020}}\n\t@misc{b, title = {Tabbed}}\n"
    assert _titles(parse_bibtex(text).published) == ["Indented", "Tabbed"]


def test_bibtex_status_field_takes_precedence_over_note():
    text = (
        "@article{s1,\n  title = {Under Review},\n  status = {Submitted},\n  note = {in prep}\n}\n"
        "@article{s2,\n  title = {Note Only},\n  note = {submitted to Nature}\n}\n"
    )
    result = parse_bibtex(text)
    assert result.submitted[0].status == "Submitted"
    assert _titles(result.submitted) == ["Under Review", "Note Only"]
    assert result.in_preparation == []


def test_unpublished_with_submit_note_is_submitted():
    text = "@unpublished{u1,\n  title = {Under Review},\n  note = {submitted for review}\n}"
    result = parse_bibtex(text)
    assert _titles(result.submitted) == ["Under Review"]
    assert result.in_preparation == []


def test_unpublished_without_submit_note_is_in_preparation():
    text = "@unpublished{u2,\n  title = {Sketch},\n  note = {draft}\n}"
    result = parse_bibtex(text)
    assert _titles(result.in_preparation) == ["Sketch"]
    assert result.submitted == []


@pytest.mark.parametrize(
    "pub, expected",
    [
        (Publication(note="In Preparation"), IN_PREPARATION),
        (Publication(note="preprint coming soon"), IN_PREPARATION),
        (Publication(note="Submitted to Nature"), SUBMITTED),
        (Publication(note="Invited talk"), PUBLISHED),
        (Publication(), PUBLISHED),
        (Publication(status="submitted", note="in prep"), SUBMITTED),
        (Publication(entrytype="unpublished"), IN_PREPARATION),
        (Publication(entrytype="unpublished", note="Resubmitted"), SUBMITTED),
    ],
)
def test_categorize(pub, expected):
    assert categorize(pub) == expected


def test_key_value_categories(key_value_text):
    result = parse_key_value(key_value_text)

    assert _titles(result.in_preparation) == ["Ongoing Work"]
    assert _titles(result.submitted) == ["Submitted Paper"]
    assert _titles(result.published) == ["Deep Learning for PDEs", "Older Paper"]


def test_key_value_fields(key_value_text):
    result = parse_key_value(key_value_text)
    submitted = result.submitted[0]
    older = result.published[1]

    assert submitted.author == "D. Verma and John Smith"
    assert submitted.arxiv == "https://arxiv.org/abs/2401.00001"
    assert submitted.status == "submitted"
    assert older.status == "published"
    assert older.video == "https://youtube.com/watch?v=abc"
    assert result.in_preparation[0].note == "Draft in progress"


def test_key_value_skips_blocks_without_labels():
    text = "just some prose\nwithout labels\n\nTitle: Kept\nYear: 2020\n"
    result = parse_key_value(text)
    assert _titles(result.published) == ["Kept"]
    assert len(result) == 1


def test_year_sort_is_descending_and_stable():
    text = "\n\n".join(
        [
            "Title: A\nYear: 2020",
            "Title: B\nYear: 2022",
            "Title: C\nYear: 2020",
            "Title: D",
            "Title: E\nYear: 2022",
        ]
    )
    assert _titles(parse_key_value(text).published) == ["B", "E", "A", "C", "D"]


@pytest.mark.parametrize(
    "year, expected",
    [("2021", 2021), (" 2019 ", 2019), ("2021a", 2021), ("", 0), ("forthcoming", 0)],
)
def test_year_key(year, expected):
    assert year_key(year) == expected


def test_parse_publications_sniffs_format(bibtex_text, key_value_text):
    assert len(parse_publications(bibtex_text)) == 5
    assert len(parse_publications(key_value_text)) == 4


def test_parse_publications_sniffs_entry_on_any_line():
    text = "% exported from a reference manager\n\n@article{a, title = {Sniffed}}\n"
    assert _titles(parse_publications(text).published) == ["Sniffed"]
    # An "@" inside a key-value value is not an entry start.
    text = "Title: Contact\nNote: mail me @example {soon}\n"
    assert _titles(parse_publications(text).published) == ["Contact"]


def test_parse_publications_explicit_format(key_value_text):
    assert len(parse_publications(key_value_text, TEXT)) == 4
    # Forced BibTeX finds no entries in key-value text.
    assert len(parse_publications(key_value_text, BIBTEX)) == 0


def test_parse_publications_rejects_unknown_format():
    with pytest.raises(ValueError):
        parse_publications("", "yaml")


@pytest.mark.parametrize(
    "path, expected",
    [
        ("data/publications.bib", BIBTEX),
        ("data/PUBS.BIB", BIBTEX),
        ("data/publications.txt", TEXT),
        ("https://example.org/pubs.bib?raw=1", BIBTEX),
        ("data/publications", None),
    ],
)
def test_detect_format(path, expected):
    assert detect_format(path) == expected
