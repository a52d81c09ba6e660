"""Tests for replacing constructors by projections."""

from typealgebra.core.builders import apply, flexible, in_, invariant, nullable, out, union
from typealgebra.core.substitution import replace, substitute
from typealgebra.core.types import ANY, STAR, Constructor, Flexible, Nullable

T = Constructor("T")
TT = Constructor("TT")
A = Constructor("A")
B = Constructor("B")
MAP = Constructor("Map")


class TestReplace:
    def test_leaf(self, env):
        assert replace(env, T, T, TT) == TT
        assert replace(env, TT, T, A) == TT

    def test_plain_type_is_invariant(self, env):
        assert replace(env, apply(env, A, T), T, TT) == apply(env, A, TT)

    def test_covariant_projection(self, env):
        assert replace(env, apply(env, A, T), T, out(TT)) == apply(env, A, out(TT))

    def test_contravariant_projection(self, env):
        assert replace(env, apply(env, A, T), T, in_(TT)) == apply(env, A, in_(TT))

    def test_star_projection(self, env):
        assert replace(env, apply(env, A, T), T, STAR) == apply(env, A, STAR)

    def test_star_arguments_are_untouched(self, env):
        a_star = apply(env, A, STAR)
        assert replace(env, a_star, T, TT) == a_star

    def test_inside_compound_shapes(self, env):
        assert replace(env, nullable(env, T), T, TT) == nullable(env, TT)
        assert replace(env, flexible(env, T, nullable(env, T)), T, TT) == Flexible(TT, Nullable(TT))


class TestPolarity:
    """Out bounds take the replacement's out bound, in bounds its in bound."""

    def test_top_level_is_positive(self, env):
        assert replace(env, T, T, out(TT)) == TT
        assert replace(env, T, T, in_(TT)) == nullable(env, ANY)

    def test_in_bound_takes_in_bound(self, env):
        # in T with T := out TT leaves nothing to consume: A<*>
        assert replace(env, apply(env, A, in_(T)), T, out(TT)) == apply(env, A, STAR)

    def test_nested_in_bounds_flip_back(self, env):
        nested = apply(env, A, in_(apply(env, B, in_(T))))
        assert replace(env, nested, T, out(TT)) == apply(env, A, in_(apply(env, B, in_(TT))))


class TestSubstitute:
    def test_simultaneous(self, env):
        swapped = substitute(env, apply(env, MAP, T, TT), {T: invariant(TT), TT: invariant(T)})
        assert swapped == apply(env, MAP, TT, T)

    def test_empty_mapping(self, env):
        a_t = apply(env, A, T)
        assert substitute(env, a_t, {}) is a_t

    def test_result_is_renormalized(self, env):
        assert replace(env, union(env, T, TT), T, TT) == TT
        assert replace(env, union(env, T, TT), T, ANY) == ANY
        assert replace(env, nullable(env, T), T, nullable(env, TT)) == nullable(env, TT)

    def test_merged_projection_collapses(self, env):
        merged = union(env, apply(env, A, T), apply(env, A, TT))
        assert str(merged) == "A<{in T & TT, out T | TT}>"
        assert replace(env, merged, TT, T) == apply(env, A, T)
