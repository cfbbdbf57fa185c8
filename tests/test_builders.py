import base64
import datetime
import random

import pytest
from urilib_next import InvalidArgument, UriPathBuilder, UriSlugBuilder


@pytest.mark.parametrize(
    "paths, expected",
    [
        ([], "/"),
        (["/"], "/"),
        (["/mypath/"], "/mypath/"),
        (["/mypath"], "/mypath"),
        (["mypath/"], "/mypath/"),
        (["/mypath/", "/myotherpath/"], "/mypath/myotherpath/"),
        (["a b"], "/a%20b"),
    ],
)
def test_path_builder_paths(paths, expected):
    builder = UriPathBuilder()
    for path in paths:
        builder = builder.add_path(path)
    assert builder.build() == expected


def test_path_builder_query():
    result = (
        UriPathBuilder()
        .add_path("/mypath/")
        .add_or_modify_query_param("myname1", "myvalue1")
        .add_or_modify_query_param("myname2", "myvalue2")
        .build()
    )
    assert result == "/mypath/?myname1=myvalue1&myname2=myvalue2"


def test_path_builder_same_param_twice():
    result = (
        UriPathBuilder()
        .add_or_modify_query_param("myname", "myvalue1")
        .add_or_modify_query_param("myname", "myvalue2")
        .build()
    )
    assert result == "/?myname=myvalue2"


def test_path_builder_is_immutable():
    base = UriPathBuilder().add_path("/api")
    users = base.add_path("users")
    posts = base.add_path("posts").add_or_modify_query_param("page", "2")
    assert base.build() == "/api"
    assert users.build() == "/api/users"
    assert posts.build() == "/api/posts?page=2"


def test_path_builder_requires_name():
    with pytest.raises(InvalidArgument):
        UriPathBuilder().add_or_modify_query_param("", "value")


@pytest.mark.parametrize(
    "text, expected",
    [
        (None, ""),
        ("", ""),
        ("My First Blog Post", "my-first-blog-post"),
        ("My  First   Blog    Post", "my-first-blog-post"),
        ("  My First Blog Post ", "my-first-blog-post"),
    ],
)
def test_slug(text, expected):
    assert UriSlugBuilder().with_text(text).build() == expected


@pytest.mark.parametrize(
    "max_length, expected",
    [
        (-1, ""),
        (0, ""),
        (1, "m"),
        (10, "my-first-b"),
        (18, "my-first-blog-post"),
        (19, "my-first-blog-post"),
    ],
)
def test_slug_max_length(max_length, expected):
    builder = UriSlugBuilder().with_text("My First Blog Post", max_length)
    assert builder.build() == expected


def test_slug_space_char():
    builder = UriSlugBuilder().with_text("My First Blog Post").with_space_char("=")
    assert builder.build() == "my=first=blog=post"
    with pytest.raises(InvalidArgument):
        builder.with_space_char("")


def _unb64(text):
    return base64.urlsafe_b64decode(text + "=" * (-len(text) % 4))


def test_slug_datetime_suffix():
    when = datetime.datetime(2024, 1, 2, 15, 4, 5)
    result = UriSlugBuilder().with_text("My Post").with_datetime_suffix(when).build()
    prefix, _, suffix = result.partition("-post-")
    assert prefix == "my"
    assert _unb64(suffix) == b"20240102030405"
    assert "=" not in suffix


def test_slug_random_suffix_is_injectable():
    builder = UriSlugBuilder().with_text("My First Blog Post")
    first = builder.with_random_suffix(5, random.Random(42)).build()
    second = builder.with_random_suffix(5, random.Random(42)).build()
    assert first == second
    assert first.startswith("my-first-blog-post-")
    assert len(_unb64(first.removeprefix("my-first-blog-post-"))) == 5


def test_slug_random_suffix_default_source():
    result = UriSlugBuilder().with_text("post").with_random_suffix(5).build()
    assert result.startswith("post-")
    assert len(result) > len("post-") + 5


@pytest.mark.parametrize("length", [-1, 0])
def test_slug_random_suffix_too_short(length):
    builder = UriSlugBuilder().with_text("My First Blog Post")
    assert builder.with_random_suffix(length).build() == "my-first-blog-post"


def test_slug_datetime_suffix_wins():
    when = datetime.datetime(2024, 1, 2)
    builder = (
        UriSlugBuilder()
        .with_text("post")
        .with_random_suffix(4, random.Random(1))
        .with_datetime_suffix(when)
    )
    assert _unb64(builder.build().removeprefix("post-")) == b"20240102120000"
