from api_chain.substitution import is_body_token
from api_chain.substitution import substitute_body
from api_chain.substitution import substitute_url


def test_substitute_url_replaces_top_level_field() -> None:
    assert substitute_url("https://x/{id}", {"id": 7}) == "https://x/7"


def test_substitute_url_missing_field_becomes_empty() -> None:
    assert substitute_url("https://x/{missing}", {"id": 7}) == "https://x/"


def test_substitute_url_without_tokens_is_unchanged() -> None:
    url = "https://example.test/posts?page=2"

    assert substitute_url(url, {"id": 7}) == url


def test_substitute_url_resolves_each_token_independently() -> None:
    last = {"userId": 3, "id": 12}

    url = substitute_url("https://x/users/{userId}/posts/{id}?again={id}", last)

    assert url == "https://x/users/3/posts/12?again=12"


def test_substitute_url_non_object_response_clears_tokens() -> None:
    assert substitute_url("https://x/{id}", [{"id": 1}]) == "https://x/"
    assert substitute_url("https://x/{id}", "text") == "https://x/"


def test_substitute_url_string_forms() -> None:
    last = {"name": "ann", "flag": True, "ratio": 1.5, "nothing": None}

    url = substitute_url("/{name}/{flag}/{ratio}/{nothing}", last)

    assert url == "/ann/true/1.5/"


def test_substitute_url_leaves_empty_braces() -> None:
    assert substitute_url("https://x/{}", {"": "a"}) == "https://x/{}"


def test_substitute_body_replaces_token_with_field_value() -> None:
    assert substitute_body({"postId": "{id}"}, {"id": 7}) == {"postId": 7}


def test_substitute_body_missing_field_keeps_literal() -> None:
    assert substitute_body({"postId": "{missing}"}, {"id": 7}) == {"postId": "{missing}"}


def test_substitute_body_passes_through_plain_values() -> None:
    body = {"title": "hello", "count": 2, "tags": ["{id}"], "meta": {"ref": "{id}"}, "partial": "x{id}"}

    resolved = substitute_body(body, {"id": 7})

    assert resolved == body


def test_substitute_body_keeps_field_type() -> None:
    last = {"user": {"name": "ann"}, "ids": [1, 2], "flag": False}

    resolved = substitute_body({"a": "{user}", "b": "{ids}", "c": "{flag}"}, last)

    assert resolved == {"a": {"name": "ann"}, "b": [1, 2], "c": False}


def test_substitute_body_does_not_mutate_input() -> None:
    body = {"postId": "{id}"}

    substitute_body(body, {"id": 7})

    assert body == {"postId": "{id}"}


def test_substitute_body_non_object_response_keeps_literals() -> None:
    assert substitute_body({"postId": "{id}"}, [1, 2]) == {"postId": "{id}"}


def test_is_body_token() -> None:
    assert is_body_token("{id}")
    assert is_body_token("{}")
    assert not is_body_token("{")
    assert not is_body_token("id")
    assert not is_body_token(7)
