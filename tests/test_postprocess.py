import pytest

from postprocess import (
    annotate_work_type,
    link_urls,
    postprocess_citation,
    repair_endash,
    strip_braces,
)

URI = "https://doi.org/10.1234/cdl.12345"


@pytest.mark.parametrize("token", [r"{\textendash}", r"{\Textendash}", r"{\TEXTENDASH}"])
def test_repair_endash(token: str) -> None:
    assert repair_endash(f"exports{token}foo") == "exports-foo"


def test_strip_braces() -> None:
    assert strip_braces("Arctic exports {FOO}") == "Arctic exports FOO"


def test_annotate_work_type_after_quoted_title() -> None:
    citation = "Doe, Jane. 2020. “Arctic Exports.” Dryad."
    assert annotate_work_type(citation, "dataset") == (
        "Doe, Jane. 2020. “Arctic Exports.” [Dataset]. Dryad."
    )


def test_annotate_work_type_after_quote_then_period() -> None:
    citation = "Doe, Jane. 2020. “Arctic Exports”. Dryad."
    assert annotate_work_type(citation, "dataset") == (
        "Doe, Jane. 2020. “Arctic Exports”. [Dataset]. Dryad."
    )


def test_annotate_work_type_after_italic_title() -> None:
    citation = "Doe, J. (2020). <i>Arctic exports</i>. Dryad."
    assert annotate_work_type(citation, "data_paper") == (
        "Doe, J. (2020). <i>Arctic exports</i>. [Data paper]. Dryad."
    )


def test_annotate_work_type_only_first_boundary() -> None:
    citation = "“A.” “B.” C."
    assert annotate_work_type(citation, "article") == "“A.” [Article]. “B.” C."


@pytest.mark.parametrize("work_type", ["", "   "])
def test_annotate_work_type_skipped_for_blank_type(work_type: str) -> None:
    citation = "Doe. “Arctic Exports.” Dryad."
    assert annotate_work_type(citation, work_type) == citation


def test_annotate_work_type_without_boundary() -> None:
    assert annotate_work_type("Doe. Arctic Exports. Dryad.", "dataset") == "Doe. Arctic Exports. Dryad."


def test_link_urls_does_not_duplicate_trailing_period() -> None:
    assert link_urls(f"Dryad. {URI}.", URI) == (
        f'Dryad. <a href="{URI}" target="_blank">{URI}</a>.'
    )


def test_link_urls_adds_trailing_period() -> None:
    assert link_urls(f"Dryad. {URI}", URI) == (
        f'Dryad. <a href="{URI}" target="_blank">{URI}</a>.'
    )


def test_link_urls_rewrites_doi_variants_to_resolvable_uri() -> None:
    citation = "Dryad. http://dx.doi.org/10.1234/CDL.12345."
    assert link_urls(citation, URI) == f'Dryad. <a href="{URI}" target="_blank">{URI}</a>.'


def test_link_urls_keeps_unrelated_urls() -> None:
    other = "http://example.org/datasets/1"
    assert link_urls(f"See {other}.", URI) == (
        f'See <a href="{other}" target="_blank">{other}</a>.'
    )


def test_link_urls_leaves_non_http_urls() -> None:
    assert link_urls("ftp://example.org/file.txt", URI) == "ftp://example.org/file.txt"


def test_postprocess_citation_applies_all_steps_in_order() -> None:
    raw = f"Doe, Jane. 2020. “Arctic Exports{{\\textendash}}foo {{FOO}}.” Dryad. {URI}."

    result = postprocess_citation(raw, "dataset", URI)

    assert result == (
        "Doe, Jane. 2020. “Arctic Exports-foo FOO.” [Dataset]. Dryad. "
        f'<a href="{URI}" target="_blank">{URI}</a>.'
    )


@pytest.mark.parametrize("tail", [",", ";", ")"])
def test_link_urls_keeps_mid_sentence_punctuation_out_of_link(tail: str) -> None:
    other = "http://example.org/datasets/1"
    assert link_urls(f"See {other}{tail} then more.", URI) == (
        f'See <a href="{other}" target="_blank">{other}</a>{tail} then more.'
    )


def test_link_urls_keeps_parenthesis_and_period() -> None:
    assert link_urls(f"(see {URI}).", URI) == (
        f'(see <a href="{URI}" target="_blank">{URI}</a>).'
    )


def test_annotate_work_type_after_italic_container() -> None:
    citation = "J. Doe, “Arctic exports,” <i>Dryad</i>. 2020."
    assert annotate_work_type(citation, "dataset") == (
        "J. Doe, “Arctic exports,” <i>Dryad</i>. [Dataset]. 2020."
    )
