from datetime import date

from moviescroll.utils import image_url, merge_query_params, normalize_query, parse_release_date


def test_normalize_query_trims_whitespace():
    assert normalize_query("  bat \n") == "bat"
    assert normalize_query(None) == ""


def test_image_url_variants():
    assert image_url("/abc.jpg") == "https://image.tmdb.org/t/p/w500/abc.jpg"
    assert image_url("abc.jpg", "w200") == "https://image.tmdb.org/t/p/w200/abc.jpg"
    assert image_url("https://cdn.example.com/x.jpg") == "https://cdn.example.com/x.jpg"
    assert image_url("", "original") is None
    assert (
        image_url("/abc.jpg", "original", base_url="https://img.example.com/t/p")
        == "https://img.example.com/t/p/original/abc.jpg"
    )


def test_parse_release_date():
    assert parse_release_date("2024-03-02") == date(2024, 3, 2)
    assert parse_release_date("2024") is None
    assert parse_release_date(None) is None


def test_merge_query_params_last_group_wins():
    params = merge_query_params(
        [("language", "en-US"), ("page", 1)],
        [("include_adult", False), ("skip", None)],
        [("language", "fr-FR")],
    )

    assert params == {"page": "1", "include_adult": "false", "language": "fr-FR"}
