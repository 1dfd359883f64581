"""Composable matchers with structured failure reports."""

from matchtree.config import MatchtreeConfig, get_config, load_config, set_config, use_config
from matchtree.diff import DiffOp, DiffTag, diff_sequences, diff_text
from matchtree.errors import AssertionFailure, ExpectationClosedError, PreconditionError
from matchtree.expectation import Expectation, ExpectationState, expect
from matchtree.location import SourceLocation
from matchtree.matchers import (
    FieldsSpec,
    FunctionMatcher,
    Matcher,
    SimpleMatcher,
    SupportsMatch,
    all_,
    any_,
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
    chain,
    consist_of,
    contain,
    contain_elements,
    each,
    ensure_matcher,
    eq_casefold,
    eq_diff,
    equal,
    every,
    fields,
    have_item,
    have_len,
    have_prefix,
    have_suffix,
    map_,
    match_any_fields,
    match_elements,
    match_fields,
    match_json,
    match_regex,
    not_,
    satisfy,
    why,
    why_lazy,
)
from matchtree.outcome import (
    Child,
    CompositeKind,
    CompositePayload,
    LeafPayload,
    MatchOutcome,
)
from matchtree.reporting import Formatter, ReportContext, get_formatter

__all__ = [
    "AssertionFailure",
    "Child",
    "CompositeKind",
    "CompositePayload",
    "DiffOp",
    "DiffTag",
    "Expectation",
    "ExpectationClosedError",
    "ExpectationState",
    "Formatter",
    "LeafPayload",
    "MatchOutcome",
    "MatchtreeConfig",
    "PreconditionError",
    "ReportContext",
    "SourceLocation",
    "diff_sequences",
    "diff_text",
    "expect",
    "get_config",
    "get_formatter",
    "load_config",
    "set_config",
    "use_config",
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
