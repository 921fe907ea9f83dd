"""
Property-based tests for project URL parsing.

Feature: connection resolution and caching
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from gitlab_connector.exceptions import InvalidProjectURLError
from gitlab_connector.resolver import (
    normalize_project_path,
    split_project_path,
    split_project_url,
)

segment_strategy = st.text(
    min_size=1,
    max_size=20,
    alphabet=st.characters(whitelist_categories=("Ll", "Lu", "Nd"), whitelist_characters="-_."),
)
host_strategy = st.builds(
    lambda scheme, name: f"{scheme}://{name}.example.com",
    st.sampled_from(["http", "https"]),
    st.text(min_size=1, max_size=15, alphabet="abcdefghijklmnopqrstuvwxyz0123456789"),
)


@given(
    host=host_strategy,
    namespace=st.lists(segment_strategy, min_size=1, max_size=4),
    name=segment_strategy,
)
@settings(max_examples=100)
def test_pattern_splits_host_and_path(host: str, namespace: list[str], name: str) -> None:
    """
    For any http(s) URL with at least two path segments, the host is the
    scheme and authority and the path is everything after it.
    """
    path = "/".join(namespace + [name])

    assert split_project_url(f"{host}/{path}") == (host, path)


@given(
    host=host_strategy,
    namespace=st.lists(segment_strategy, min_size=1, max_size=4),
    name=segment_strategy,
)
@settings(max_examples=100)
def test_override_strips_prefix(host: str, namespace: list[str], name: str) -> None:
    """
    With a base URL override the path is the URL without the override and
    without one leading slash.
    """
    path = "/".join(namespace + [name])
    base_url = f"{host}/gitlab"

    assert split_project_url(f"{base_url}/{path}", base_url) == (base_url, path)


@given(namespace=st.lists(segment_strategy, min_size=1, max_size=4), name=segment_strategy)
@settings(max_examples=100)
def test_split_at_last_slash(namespace: list[str], name: str) -> None:
    """Namespace is everything before the last slash, name everything after."""
    assert split_project_path("/".join(namespace + [name])) == ("/".join(namespace), name)


def test_example_url() -> None:
    host, path = split_project_url("https://git.example.com/group/sub/project.git")

    assert host == "https://git.example.com"
    assert path == "group/sub/project.git"
    assert split_project_path(normalize_project_path(path)) == ("group/sub", "project")


def test_port_in_authority() -> None:
    assert split_project_url("http://localhost:8080/group/project") == (
        "http://localhost:8080",
        "group/project",
    )


@pytest.mark.parametrize(
    "url",
    [
        "",
        "gitlab.example.com/group/project",
        "ftp://gitlab.example.com/group/project",
        "https://gitlab.example.com",
        "https://gitlab.example.com/project",
    ],
)
def test_pattern_rejects(url: str) -> None:
    with pytest.raises(InvalidProjectURLError):
        split_project_url(url)


def test_override_must_be_literal_prefix() -> None:
    with pytest.raises(InvalidProjectURLError):
        split_project_url("https://other.example.com/ns/proj", "https://git.example.com")


def test_override_is_case_sensitive() -> None:
    with pytest.raises(InvalidProjectURLError):
        split_project_url("https://Git.example.com/ns/proj", "https://git.example.com")


def test_override_is_trimmed() -> None:
    assert split_project_url(
        "https://git.example.com/ns/proj", "  https://git.example.com  "
    ) == ("https://git.example.com", "ns/proj")


def test_blank_override_falls_back_to_pattern() -> None:
    assert split_project_url("https://git.example.com/ns/proj", "   ") == (
        "https://git.example.com",
        "ns/proj",
    )


def test_override_strips_single_slash() -> None:
    _, path = split_project_url("https://git.example.com//ns/proj", "https://git.example.com")

    assert path == "/ns/proj"


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("group/project.git", "group/project"),
        ("group/project.GIT", "group/project.GIT"),
        ("group/project.git.git", "group/project.git"),
        ("group/projectgit", "group/projectgit"),
        ("group/project", "group/project"),
    ],
)
def test_normalize_strips_one_git_suffix(path: str, expected: str) -> None:
    assert normalize_project_path(path) == expected


@pytest.mark.parametrize("path", ["project", "", "/project", "group/"])
def test_split_rejects_incomplete_paths(path: str) -> None:
    with pytest.raises(InvalidProjectURLError):
        split_project_path(path)
