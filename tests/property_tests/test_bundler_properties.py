"""
Property-Based Tests for the Bundler Core

These tests validate properties that should hold for any file list,
any content and any persisted configuration.
"""

import os
import shlex

import pytest
from hypothesis import given, settings, strategies as st

from bundler.bundler import extension_of, filter_by_language, sort_files, strip_empty_lines
from bundler.config.response_file import format_response_lines, quote_value
from bundler.config.schema import BundleConfig, SortMode
from bundler.errors import NoMatchError
from cli.bundle import bundle, build_bundle_config


EXTENSIONS = ["py", "PY", "js", "cs", "md", "txt", ""]

file_names = st.builds(
    lambda stem, ext, folder: os.path.join("/project", folder, f"{stem}.{ext}" if ext else stem),
    st.from_regex(r"[a-zA-Z0-9_]{1,8}", fullmatch=True),
    st.sampled_from(EXTENSIONS),
    st.sampled_from(["", "src", "src/util", "web"]),
)

language_sets = st.lists(st.sampled_from(["py", "js", "cs", "md", "java"]), min_size=1, max_size=3, unique=True)

line_text = st.text(
    alphabet=st.characters(blacklist_categories=("Cs", "Cc", "Zl", "Zp")),
    max_size=30,
)


class TestFilterProperties:
    """
    Property: filtering keeps exactly the files whose extension is listed,
    in discovery order, and never returns an empty list.
    """

    @given(files=st.lists(file_names, max_size=20), languages=language_sets)
    @settings(max_examples=100)
    def test_filter_matches_extension(self, files, languages):
        expected = [f for f in files if extension_of(f)[1:].lower() in languages]
        if not expected:
            with pytest.raises(NoMatchError):
                filter_by_language(files, languages)
        else:
            assert filter_by_language(files, languages) == expected

    @given(files=st.lists(file_names, min_size=1, max_size=20))
    @settings(max_examples=50)
    def test_all_keeps_everything(self, files):
        assert filter_by_language(files, ["all"]) == files


class TestSortProperties:
    """Property: sorting is a permutation with a fixed ordering rule."""

    @given(files=st.lists(file_names, max_size=20))
    @settings(max_examples=100)
    def test_alphabetical_is_ordered_and_idempotent(self, files):
        ordered = sort_files(files, SortMode.ALPHABETICAL)
        assert sorted(ordered) == sorted(files)
        assert all(a <= b for a, b in zip(ordered, ordered[1:]))
        assert sort_files(ordered, SortMode.ALPHABETICAL) == ordered

    @given(files=st.lists(file_names, max_size=20))
    @settings(max_examples=100)
    def test_by_extension_groups_extensions(self, files):
        ordered = sort_files(files, SortMode.BY_EXTENSION)
        keys = [(extension_of(f), f) for f in ordered]
        assert keys == sorted(keys)
        assert sorted(ordered) == sorted(files)

    @given(files=st.lists(file_names, max_size=20))
    def test_none_keeps_discovery_order(self, files):
        assert sort_files(files, SortMode.NONE) == files


class TestStripEmptyLinesProperties:
    """Property: no blank line survives and stripping twice changes nothing."""

    @given(lines=st.lists(line_text, max_size=15), separator=st.sampled_from(["\n", "\r\n", "\r"]))
    @settings(max_examples=100)
    def test_no_blank_lines_remain(self, lines, separator):
        stripped = strip_empty_lines(separator.join(lines))
        assert stripped == "\n".join(line for line in lines if line.strip())
        assert strip_empty_lines(stripped) == stripped


class TestResponseFileProperties:
    """Property: persisted values and configs come back unchanged."""

    @given(value=line_text)
    @settings(max_examples=200)
    def test_quoted_value_splits_back(self, value):
        assert shlex.split(quote_value(value), posix=True) == [value]

    @given(
        folder=st.sampled_from(["out", "my bundles", "C:\\Users\\me"]),
        name=st.from_regex(r"[a-zA-Z0-9_]{1,10}", fullmatch=True),
        languages=language_sets,
        note=st.booleans(),
        sort=st.sampled_from(list(SortMode)),
        remove_empty_lines=st.booleans(),
        author=st.one_of(
            st.none(),
            st.from_regex(r"[A-Za-z][A-Za-z \"'\\]{0,20}[A-Za-z]", fullmatch=True),
        ),
    )
    @settings(max_examples=100)
    def test_config_round_trip(self, folder, name, languages, note, sort, remove_empty_lines, author):
        config = BundleConfig(
            output_path=os.path.join(folder, f"{name}.txt"),
            languages=languages,
            include_source_note=note,
            sort_mode=sort,
            remove_empty_lines=remove_empty_lines,
            author=author,
        )

        args = []
        for line in format_response_lines(config):
            args.extend(shlex.split(line, posix=True))
        params = bundle.make_context("bundle", args).params

        replayed = build_bundle_config(
            params["output"], params["languages"], params["note"],
            params["sort"], params["remove_empty_lines"], params["author"],
        )
        assert replayed == config
