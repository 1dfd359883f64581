"""Matcher catalog: the capability, combinators, and leaf matchers."""

from matchtree.matchers.base import (
    FunctionMatcher,
    Matcher,
    SimpleMatcher,
    SupportsMatch,
    ensure_matcher,
    satisfy,
)
from matchtree.matchers.combinators import (
    all_,
    any_,
    chain,
    each,
    every,
    map_,
    match_elements,
    not_,
    why,
    why_lazy,
)
from matchtree.matchers.diff import eq_diff
from matchtree.matchers.fields import FieldsSpec, fields, match_any_fields, match_fields
from matchtree.matchers.values import (
    approx_eq,
    approx_eq_time,
    be_default,
    be_directory,
    be_empty,
    be_existing_file,
    be_false,
    be_ge,
    be_gt,
    be_in,
    be_instance_of,
    be_le,
    be_lt,
    be_none,
    be_regular_file,
    be_some,
    be_sorted_asc,
    be_sorted_by,
    be_sorted_desc,
    be_symlink,
    be_true,
    be_zero,
    consist_of,
    contain,
    contain_elements,
    eq_casefold,
    equal,
    have_item,
    have_len,
    have_prefix,
    have_suffix,
    match_json,
    match_regex,
)

__all__ = [
    "FieldsSpec",
    "FunctionMatcher",
    "Matcher",
    "SimpleMatcher",
    "SupportsMatch",
    "all_",
    "any_",
    "approx_eq",
    "approx_eq_time",
    "be_default",
    "be_directory",
    "be_empty",
    "be_existing_file",
    "be_false",
    "be_ge",
    "be_gt",
    "be_in",
    "be_instance_of",
    "be_le",
    "be_lt",
    "be_none",
    "be_regular_file",
    "be_some",
    "be_sorted_asc",
    "be_sorted_by",
    "be_sorted_desc",
    "be_symlink",
    "be_true",
    "be_zero",
    "chain",
    "consist_of",
    "contain",
    "contain_elements",
    "each",
    "ensure_matcher",
    "eq_casefold",
    "eq_diff",
    "equal",
    "every",
    "fields",
    "have_item",
    "have_len",
    "have_prefix",
    "have_suffix",
    "map_",
    "match_any_fields",
    "match_elements",
    "match_fields",
    "match_json",
    "match_regex",
    "not_",
    "satisfy",
    "why",
    "why_lazy",
]
