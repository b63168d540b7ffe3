"""Tests for the stylesheet rewrite passes."""

import textwrap

import pytest

from cssnest.factory import CloneNodeFactory
from cssnest.model.nodes import Position, Root
from cssnest.parser import parse_css
from cssnest.serialize import to_css
from cssnest.transforms import (
    CleanupTransform,
    CommonPropertyFactoringTransform,
    DescendantNestingTransform,
    PseudoNestingTransform,
    SiblingCollapsingTransform,
    collapse_nested_siblings,
    factor_common_properties,
    nest_descendants,
    nest_pseudos,
    remove_empty_rules,
)
from cssnest.transforms.collapse import block_signature
from cssnest.transforms.factoring import sharing_groups


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _expect(text: str) -> str:
    return textwrap.dedent(text).lstrip("\n")


def _run(pass_fn, source: str) -> str:
    root = parse_css(source)
    pass_fn(root)
    return to_css(root)


# ---------------------------------------------------------------------------
# Structural cleanup
# ---------------------------------------------------------------------------


class TestCleanup:
    def test_removes_empty_rule(self):
        out = _run(remove_empty_rules, ".a {} .b { color: red; }")
        assert out == _expect("""
            .b {
              color: red;
            }
            """)

    def test_rule_holding_only_empty_rules_is_removed(self):
        assert _run(remove_empty_rules, ".a { .b { .c {} } }") == ""

    def test_keeps_empty_at_rule(self):
        out = _run(remove_empty_rules, "@media print { .a {} }")
        assert out == "@media print {}\n"

    def test_idempotent(self):
        root = parse_css(".a { .b {} } .c { color: red; .d {} } @media print { .e {} }")
        remove_empty_rules(root)
        once = to_css(root)
        remove_empty_rules(root)
        assert to_css(root) == once

    def test_transform_returns_same_root(self):
        root = parse_css(".a {}")
        assert CleanupTransform().apply(root) is root
        assert root.nodes == []


# ---------------------------------------------------------------------------
# Descendant nesting
# ---------------------------------------------------------------------------


class TestDescendantNesting:
    def test_simple_descendant(self):
        out = _run(nest_descendants, ".nav a { color: red; }")
        assert out == _expect("""
            .nav {
              a {
                color: red;
              }
            }
            """)

    def test_reuses_existing_parent(self):
        out = _run(nest_descendants, ".nav { margin: 0; } .nav a { color: red; }")
        assert out == _expect("""
            .nav {
              margin: 0;
              a {
                color: red;
              }
            }
            """)

    def test_reuses_existing_nested_rule(self):
        out = _run(nest_descendants, ".nav { a { margin: 0; } } .nav a { color: red; }")
        assert out == _expect("""
            .nav {
              a {
                margin: 0;
                color: red;
              }
            }
            """)

    def test_siblings_share_created_parent(self):
        out = _run(nest_descendants, ".p .a { color: red; } .p .b { color: blue; }")
        assert out == _expect("""
            .p {
              .a {
                color: red;
              }
              .b {
                color: blue;
              }
            }
            """)

    def test_three_tokens_flatten_one_level(self):
        out = _run(nest_descendants, ".a .b .c { color: red; }")
        assert out == _expect("""
            .a .b {
              .c {
                color: red;
              }
            }
            """)

    def test_unsplittable_parts_stay_on_original_rule(self):
        out = _run(nest_descendants, ".x, .nav a { color: red; }")
        assert out == _expect("""
            .x {
              color: red;
            }
            .nav {
              a {
                color: red;
              }
            }
            """)

    def test_reduced_rule_is_reused_as_parent(self):
        root = parse_css(".p, .q .r { c: 1; } .p .s { d: 2; }")
        nest_descendants(root)
        assert [r.selector for r in root.rules()] == [".p", ".q"]
        assert to_css(root) == _expect("""
            .p {
              c: 1;
              .s {
                d: 2;
              }
            }
            .q {
              .r {
                c: 1;
              }
            }
            """)

    def test_explicit_combinator_left_alone(self):
        source = ".a > .b { color: red; }"
        assert _run(nest_descendants, source) == to_css(parse_css(source))

    def test_space_inside_attribute_selector_is_not_a_combinator(self):
        source = '[title="a b"] { color: red; }'
        assert _run(nest_descendants, source) == to_css(parse_css(source))

    def test_recurses_into_at_rules_and_rules(self):
        out = _run(nest_descendants, "@media print { .p { .q .r { color: red; } } }")
        assert out == _expect("""
            @media print {
              .p {
                .q {
                  .r {
                    color: red;
                  }
                }
              }
            }
            """)

    def test_nested_rules_of_original_are_carried_over(self):
        out = _run(nest_descendants, ".nav a { color: red; span { margin: 0; } }")
        assert out == _expect("""
            .nav {
              a {
                color: red;
                span {
                  margin: 0;
                }
              }
            }
            """)

    def test_created_rules_keep_source_position(self):
        root = parse_css("\n.nav a { color: red; }")
        nest_descendants(root, CloneNodeFactory())
        parent = root.rules()[0]
        assert parent.selector == ".nav"
        assert parent.source == Position(line=2, column=1)
        assert parent.rules()[0].source == Position(line=2, column=1)


# ---------------------------------------------------------------------------
# Sibling collapsing
# ---------------------------------------------------------------------------


class TestSiblingCollapsing:
    def test_identical_nested_siblings_merge(self):
        out = _run(collapse_nested_siblings, ".p { .x { color: red; } .y { color: red; } }")
        assert out == _expect("""
            .p {
              .x, .y {
                color: red;
              }
            }
            """)

    def test_declaration_order_does_not_matter(self):
        source = ".p { .x { color: red; margin: 0; } .y { margin: 0; color: red; } }"
        out = _run(collapse_nested_siblings, source)
        assert out == _expect("""
            .p {
              .x, .y {
                color: red;
                margin: 0;
              }
            }
            """)

    def test_one_differing_pair_prevents_merge(self):
        source = ".p { .x { color: red; } .y { color: red; margin: 0; } }"
        assert _run(collapse_nested_siblings, source) == to_css(parse_css(source))

    def test_root_level_siblings_are_not_merged(self):
        source = ".x { color: red; } .y { color: red; }"
        assert _run(collapse_nested_siblings, source) == to_css(parse_css(source))

    def test_selector_parts_are_sorted_and_deduplicated(self):
        source = ".p { .z, .a { color: red; } .m, .a { color: red; } }"
        out = _run(collapse_nested_siblings, source)
        assert out.splitlines()[1] == "  .a, .m, .z {"

    def test_merged_rule_takes_first_members_place(self):
        source = ".p { .first { margin: 0; } .x { color: red; } .mid { padding: 0; } .y { color: red; } }"
        out = _run(collapse_nested_siblings, source)
        selectors = [r.selector for r in parse_css(out).rules()[0].rules()]
        assert selectors == [".first", ".x, .y", ".mid"]

    def test_nested_blocks_must_match(self):
        different = ".p { .x { .i { color: red; } } .y { .i { color: blue; } } }"
        assert _run(collapse_nested_siblings, different) == to_css(parse_css(different))

        same = ".p { .x { .i { color: red; } } .y { .i { color: red; } } }"
        out = _run(collapse_nested_siblings, same)
        assert out == _expect("""
            .p {
              .x, .y {
                .i {
                  color: red;
                }
              }
            }
            """)

    def test_inside_at_rule(self):
        source = "@media print { .p { .x { color: red; } .y { color: red; } } }"
        out = _run(collapse_nested_siblings, source)
        assert "    .x, .y {" in out.splitlines()

    def test_signature_ignores_declaration_order(self):
        a = parse_css(".a { color: red; margin: 0; }").rules()[0]
        b = parse_css(".b { margin: 0; color: red; }").rules()[0]
        assert block_signature(a) == block_signature(b)

    def test_signature_distinguishes_important(self):
        a = parse_css(".a { color: red; }").rules()[0]
        b = parse_css(".b { color: red !important; }").rules()[0]
        assert block_signature(a) != block_signature(b)


# ---------------------------------------------------------------------------
# Common-property factoring
# ---------------------------------------------------------------------------


class TestCommonPropertyFactoring:
    def test_shared_pair_moves_to_grouped_rule(self):
        out = _run(factor_common_properties, ".a { color: red; margin: 0; } .b { color: red; }")
        assert out == _expect("""
            .a, .b {
              color: red;
            }
            .a {
              margin: 0;
            }
            """)

    def test_groups_keyed_by_exact_sharing_set(self):
        source = ".a { color: red; margin: 0; } .b { color: red; margin: 0; } .c { color: red; }"
        out = _run(factor_common_properties, source)
        assert out == _expect("""
            .a, .b {
              margin: 0;
            }
            .a, .b, .c {
              color: red;
            }
            """)

    def test_grouped_rule_goes_before_first_sharing_sibling(self):
        source = ".z { padding: 0; } .a { color: red; margin: 0; } .b { color: red; }"
        out = _run(factor_common_properties, source)
        selectors = [r.selector for r in parse_css(out).rules()]
        assert selectors == [".z", ".a, .b", ".a"]

    def test_values_compare_as_exact_text(self):
        source = ".a { color: red; } .b { color: #f00; } .c { color: RED; }"
        assert _run(factor_common_properties, source) == to_css(parse_css(source))

    def test_important_is_part_of_the_pair(self):
        source = ".a { color: red !important; } .b { color: red; }"
        assert _run(factor_common_properties, source) == to_css(parse_css(source))

    def test_important_pairs_factor_together(self):
        out = _run(factor_common_properties, ".a { color: red !important; } .b { color: red !important; }")
        assert out == _expect("""
            .a, .b {
              color: red !important;
            }
            """)

    def test_single_rule_is_untouched(self):
        source = ".a { color: red; color: red; }"
        assert _run(factor_common_properties, source) == to_css(parse_css(source))

    def test_nested_declarations_are_not_shared_with_siblings(self):
        source = ".a { color: red; .x { margin: 0; } } .b { margin: 0; }"
        assert _run(factor_common_properties, source) == to_css(parse_css(source))

    def test_factors_inside_at_rule_and_nested_rules(self):
        source = "@media (max-width: 600px) { .p { .a { color: red; } .b { color: red; } } }"
        out = _run(factor_common_properties, source)
        assert out == _expect("""
            @media (max-width: 600px) {
              .p {
                .a, .b {
                  color: red;
                }
              }
            }
            """)

    def test_sharing_groups_are_sorted(self):
        root = parse_css(".a { x: 1; y: 2; } .b { y: 2; } .c { x: 1; y: 2; }")
        groups = sharing_groups(root.rules())
        assert list(groups) == [(0, 1, 2), (0, 2)]
        assert groups[(0, 2)] == [("x", "1", False)]
        assert groups[(0, 1, 2)] == [("y", "2", False)]

    def test_new_declarations_keep_source_of_first_occurrence(self):
        root = parse_css(".a { color: red; }\n.b { color: red; }")
        factor_common_properties(root, CloneNodeFactory())
        grouped = root.rules()[0]
        assert grouped.selector == ".a, .b"
        assert grouped.source == Position(line=1, column=1)
        assert grouped.declarations()[0].source == Position(line=1, column=6)


# ---------------------------------------------------------------------------
# Pseudo nesting
# ---------------------------------------------------------------------------


class TestPseudoNesting:
    def test_hover_nests_with_implicit_parent(self):
        out = _run(nest_pseudos, "a { color: blue; } a:hover { color: green; }")
        assert out == _expect("""
            a {
              color: blue;
              &:hover {
                color: green;
              }
            }
            """)

    def test_pseudo_element(self):
        out = _run(nest_pseudos, '.q { margin: 0; } .q::before { content: "x"; }')
        assert out == _expect("""
            .q {
              margin: 0;
              &::before {
                content: "x";
              }
            }
            """)

    def test_list_of_extensions_is_absorbed(self):
        out = _run(nest_pseudos, "a { color: blue; } a:hover, a:focus { color: green; }")
        assert "  &:hover, &:focus {" in out.splitlines()

    def test_mixed_list_is_not_absorbed(self):
        source = "a { color: blue; } a:hover, b:focus { color: green; }"
        assert _run(nest_pseudos, source) == to_css(parse_css(source))

    def test_prefix_without_colon_is_not_a_pseudo(self):
        source = ".btn { color: red; } .btn-primary { color: blue; }"
        assert _run(nest_pseudos, source) == to_css(parse_css(source))

    def test_base_may_follow_the_pseudo(self):
        out = _run(nest_pseudos, "a:hover { color: green; } a { color: blue; }")
        assert out == _expect("""
            a {
              color: blue;
              &:hover {
                color: green;
              }
            }
            """)

    def test_chained_pseudos_nest_recursively(self):
        source = 'a { color: blue; } a:hover { color: green; } a:hover::after { content: "x"; }'
        out = _run(nest_pseudos, source)
        assert out == _expect("""
            a {
              color: blue;
              &:hover {
                color: green;
                &::after {
                  content: "x";
                }
              }
            }
            """)

    def test_multi_part_base_matches_part_by_part(self):
        out = _run(nest_pseudos, "a, b { color: blue; } b:hover { color: green; }")
        assert out == _expect("""
            a, b {
              color: blue;
              &:hover {
                color: green;
              }
            }
            """)

    def test_inside_at_rule(self):
        out = _run(nest_pseudos, "@media print { a { color: blue; } a:visited { color: gray; } }")
        assert "    &:visited {" in out.splitlines()


# ---------------------------------------------------------------------------
# Transform classes
# ---------------------------------------------------------------------------


class TestTransformClasses:
    @pytest.mark.parametrize(
        "transform_cls",
        [
            DescendantNestingTransform,
            SiblingCollapsingTransform,
            CommonPropertyFactoringTransform,
            PseudoNestingTransform,
        ],
    )
    def test_apply_mutates_and_returns_root(self, transform_cls):
        root = parse_css(".a { color: red; }")
        assert transform_cls().apply(root) is root

    def test_empty_root(self):
        root = Root()
        for transform in (
            DescendantNestingTransform(),
            SiblingCollapsingTransform(),
            CommonPropertyFactoringTransform(),
            PseudoNestingTransform(),
            CleanupTransform(),
        ):
            transform.apply(root)
        assert root.nodes == []
