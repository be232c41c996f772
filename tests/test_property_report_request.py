"""Property-based tests for report request construction.

**Property 5: Default Summary Flag**
**Property 6: Versions Depth Collapsing**
"""

from hypothesis import given
from hypothesis import strategies as st

from cargo_info.report import (
    ALL_VERSIONS,
    FIELD_FLAGS,
    RECENT_VERSIONS,
    Flag,
    ReportRequest,
    versions_depth,
)

switches = st.fixed_dictionaries(
    {
        "repository": st.booleans(),
        "documentation": st.booleans(),
        "downloads": st.booleans(),
        "homepage": st.booleans(),
    }
)


# **Property 5: Default Summary Flag**
@given(
    selected=switches,
    verbose=st.booleans(),
    keywords=st.booleans(),
    versions=st.integers(min_value=0, max_value=5),
)
def test_flag_set_is_never_empty(selected, verbose, keywords, versions):
    """With no field switch the flags are exactly (SUMMARY,); otherwise they are the
    chosen fields in the fixed order, without SUMMARY."""
    request = ReportRequest.from_options(
        verbose=verbose, keywords=keywords, versions=versions, **selected
    )

    chosen = [flag for flag in FIELD_FLAGS if selected[flag.value]]
    if chosen:
        assert list(request.flags) == chosen
        assert Flag.SUMMARY not in request.flags
    else:
        assert request.flags == (Flag.SUMMARY,)


# **Property 6: Versions Depth Collapsing**
@given(count=st.integers(min_value=0, max_value=1000))
def test_versions_depth_collapses_to_three_levels(count):
    """Repeat counts collapse to none, recent, or the full history."""
    depth = versions_depth(count)
    if count == 0:
        assert depth == 0
    elif count == 1:
        assert depth == RECENT_VERSIONS == 5
    else:
        assert depth == ALL_VERSIONS
        assert depth >= 10**9
