"""Tests for filename pattern inference."""

import re

import pytest

from review_tools.patterns import (
    CellPattern,
    PatternError,
    build_pattern,
    compile_pattern,
    derive_label,
    extract_patterns,
    longest_common_prefix,
    match_radix,
)


def _radix_of(pattern, name):
    return match_radix(compile_pattern(pattern), name)


# -- extraction --


def test_two_variants_same_extension(render_passes):
    result = extract_patterns(render_passes)

    assert result.radix == "shot_001"
    assert [cell.tail for cell in result.cell_patterns] == ["_diffuse.jpg", "_specular.jpg"]
    assert [cell.label for cell in result.cell_patterns] == ["diffuse", "specular"]


def test_mixed_extensions_with_bare_radix(mixed_passes):
    result = extract_patterns(mixed_passes)

    assert result.radix == "shot_001"
    assert [cell.tail for cell in result.cell_patterns] == [".jpg", "_diffuse.tiff", "_specular.jpeg"]
    assert [cell.label for cell in result.cell_patterns] == ["jpg", "diffuse", "specular"]


def test_version_suffix_backs_off_to_separator():
    result = extract_patterns(["frame001_v1.jpg", "frame001_v2.jpg"])

    assert result.radix == "frame001"
    assert [cell.label for cell in result.cell_patterns] == ["v1", "v2"]
    assert result.cell_patterns[0].tail == "_v1.jpg"


def test_dash_separator():
    result = extract_patterns(["img-001-left.png", "img-001-right.png"])

    assert result.radix == "img-001"
    assert [cell.label for cell in result.cell_patterns] == ["left", "right"]


def test_three_variants():
    result = extract_patterns(["render_042_beauty.exr", "render_042_depth.exr", "render_042_normal.exr"])

    assert result.radix == "render_042"
    assert [cell.label for cell in result.cell_patterns] == ["beauty", "depth", "normal"]


def test_cell_order_follows_input_order():
    result = extract_patterns(["shot_001_specular.jpg", "shot_001_diffuse.jpg"])

    assert [cell.label for cell in result.cell_patterns] == ["specular", "diffuse"]


def test_single_file_returns_none():
    assert extract_patterns(["shot_001_diffuse.jpg"]) is None


def test_empty_input_returns_none():
    assert extract_patterns([]) is None


def test_no_common_prefix_returns_none():
    assert extract_patterns(["abc.png", "xyz.jpg"]) is None


def test_mid_word_prefix_without_separator_fails():
    # common prefix "frame" ends inside a word and has no separator to back off to
    assert extract_patterns(["frameA.png", "frameB.png"]) is None


def test_prefix_of_only_separators_fails():
    assert extract_patterns(["__a.png", "__b.png"]) is None


def test_duplicate_tails_rejected():
    assert extract_patterns(["shot_001_a.jpg", "shot_001_a.jpg"]) is None


def test_separator_after_prefix_keeps_prefix():
    result = extract_patterns(["take1.png", "take1_graded.png"])

    assert result.radix == "take1"
    assert [cell.tail for cell in result.cell_patterns] == [".png", "_graded.png"]


def test_name_equal_to_prefix_keeps_prefix():
    result = extract_patterns(["plate", "plate_denoised.exr"])

    assert result.radix == "plate"
    assert result.cell_patterns[0].tail == ""
    assert result.cell_patterns[1].label == "denoised"


def test_tails_are_distinct_on_success(mixed_passes):
    result = extract_patterns(mixed_passes)
    tails = [cell.tail for cell in result.cell_patterns]

    assert len(set(tails)) == len(tails)


# -- labels and prefixes --


@pytest.mark.parametrize(
    ("tail", "label"),
    [
        ("_diffuse.jpg", "diffuse"),
        (".jpg", "jpg"),
        ("-left.png", "left"),
        ("_beauty.v2.exr", "beauty.v2"),
        ("_raw", "raw"),
        ("", ""),
    ],
)
def test_derive_label(tail, label):
    assert derive_label(tail) == label


def test_longest_common_prefix_stops_at_shortest_name():
    assert longest_common_prefix(["shot_001", "shot_001_diffuse.jpg"]) == "shot_001"
    assert longest_common_prefix(["shot_01", "shot_02", "shot_1"]) == "shot_"
    assert longest_common_prefix([]) == ""


# -- compiled patterns --


def test_pattern_escapes_tail():
    assert build_pattern("_a+b(1).jpg") == "^(.*)" + re.escape("_a+b(1).jpg") + r"\Z"
    assert _radix_of(build_pattern("_a+b(1).jpg"), "x_a+b(1).jpg") == "x"
    assert _radix_of(build_pattern("_a+b(1).jpg"), "x_aab1.jpg") is None


def test_pattern_matches_other_radix(render_passes):
    cell = extract_patterns(render_passes).cell_patterns[0]

    assert _radix_of(cell.pattern, "shot_042_diffuse.jpg") == "shot_042"


def test_pattern_matches_other_radix_mixed_extensions(mixed_passes):
    cells = extract_patterns(mixed_passes).cell_patterns

    assert _radix_of(cells[1].pattern, "shot_042_diffuse.tiff") == "shot_042"
    assert _radix_of(cells[0].pattern, "shot_042.jpg") == "shot_042"


def test_pattern_rejects_unrelated_file(render_passes):
    cell = extract_patterns(render_passes).cell_patterns[0]

    assert _radix_of(cell.pattern, "photo_holiday.png") is None
    assert _radix_of(cell.pattern, "shot_042_diffuse.jpg.bak") is None


def test_pattern_rejects_trailing_newline(render_passes):
    cell = extract_patterns(render_passes).cell_patterns[0]

    assert _radix_of(cell.pattern, "shot_002_diffuse.jpg\n") is None


def test_hand_written_pattern_is_accepted():
    assert _radix_of(r"^(.*)_diffuse\.(jpg|png)$", "shot_007_diffuse.png") == "shot_007"


def test_invalid_pattern_raises():
    with pytest.raises(PatternError):
        compile_pattern("^(.*_diffuse.jpg$")


def test_pattern_without_group_raises():
    with pytest.raises(PatternError):
        compile_pattern(r"_diffuse\.jpg$")


def test_unmatched_optional_group_gives_none():
    assert _radix_of(r"^(shot)?_diffuse\.jpg$", "_diffuse.jpg") is None


def test_cell_pattern_is_plain_value():
    cell = CellPattern(label="diffuse", tail="_diffuse.jpg", pattern=build_pattern("_diffuse.jpg"))

    assert cell == CellPattern("diffuse", "_diffuse.jpg", r"^(.*)_diffuse\.jpg\Z")
