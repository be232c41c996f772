"""Property-based tests for version history rendering.

**Property 4: Version History Depth**
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from cargo_info.crate_view import CrateView
from cargo_info.report import ALL_VERSIONS

version_strategy = st.builds(
    lambda major, minor, patch_v, downloads, yanked: {
        "num": f"{major}.{minor}.{patch_v}",
        "created_at": "2023-03-01T10:00:00",
        "downloads": downloads,
        "yanked": yanked,
    },
    major=st.integers(min_value=0, max_value=99),
    minor=st.integers(min_value=0, max_value=99),
    patch_v=st.integers(min_value=0, max_value=999),
    downloads=st.integers(min_value=0, max_value=10**9),
    yanked=st.booleans(),
)


# **Property 4: Version History Depth**
@settings(deadline=None)
@given(
    versions=st.lists(version_strategy, max_size=30),
    depth=st.one_of(st.integers(min_value=1, max_value=40), st.just(ALL_VERSIONS)),
)
def test_rows_and_hint_follow_depth(versions, depth):
    """For any history of length L and depth D, min(D, L) rows render, and the
    hint naming L appears exactly when D < L."""
    lines = CrateView({"versions": versions}).version_lines(depth)
    total = len(versions)
    shown = min(depth, total)

    assert lines[0].startswith("VERSION")
    rows = lines[2 : 2 + shown]
    assert [row.split()[0] for row in rows] == [v["num"] for v in versions[:shown]]
    assert [row.endswith("(yanked)") for row in rows] == [v["yanked"] for v in versions[:shown]]

    hint = f"... use -VV to show all {total} versions"
    if depth < total:
        assert lines[2 + shown :] == ["", hint]
    else:
        assert len(lines) == 2 + total
        assert not any("-VV" in line for line in lines)


# **Property 4: Version History Depth**
@given(versions=st.lists(version_strategy, max_size=10))
def test_zero_depth_renders_nothing(versions):
    """With depth zero, neither header nor rows are produced."""
    assert CrateView({"versions": versions}).version_lines(0) == []
