"""Tests for the subtyping relation lattice."""

import itertools

import pytest

from typealgebra.core.relation import SubtypingRelation

SUB = SubtypingRelation.SUBTYPE
SUP = SubtypingRelation.SUPERTYPE
EQ = SubtypingRelation.EQUIVALENT
UN = SubtypingRelation.UNRELATED
ALL = list(SubtypingRelation)


class TestInvert:
    """Tests for invert."""

    def test_swaps_directions(self):
        assert SUB.invert() is SUP
        assert SUP.invert() is SUB

    def test_fixes_symmetric_relations(self):
        assert EQ.invert() is EQ
        assert UN.invert() is UN

    @pytest.mark.parametrize("r", ALL)
    def test_involution(self, r):
        assert r.invert().invert() is r


class TestOr:
    """Tests for the join of two relations."""

    def test_subtype_or_supertype_is_equivalent(self):
        assert SUB | SUP is EQ

    @pytest.mark.parametrize("r", ALL)
    def test_equivalent_absorbs(self, r):
        assert EQ | r is EQ
        assert r | EQ is EQ

    @pytest.mark.parametrize("r", ALL)
    def test_unrelated_is_identity(self, r):
        assert UN | r is r
        assert r | UN is r

    @pytest.mark.parametrize("a,b", list(itertools.product(ALL, ALL)))
    def test_commutative(self, a, b):
        assert a | b is b | a

    @pytest.mark.parametrize("a,b,c", list(itertools.product(ALL, ALL, ALL)))
    def test_associative(self, a, b, c):
        assert (a | b) | c is a | (b | c)


class TestAnd:
    """Tests for the meet of two relations."""

    def test_subtype_and_supertype_is_unrelated(self):
        assert SUB & SUP is UN

    @pytest.mark.parametrize("r", ALL)
    def test_equivalent_is_identity(self, r):
        assert EQ & r is r
        assert r & EQ is r

    @pytest.mark.parametrize("r", ALL)
    def test_unrelated_absorbs(self, r):
        assert UN & r is UN
        assert r & UN is UN

    @pytest.mark.parametrize("a,b", list(itertools.product(ALL, ALL)))
    def test_commutative(self, a, b):
        assert a & b is b & a

    @pytest.mark.parametrize("a,b,c", list(itertools.product(ALL, ALL, ALL)))
    def test_associative(self, a, b, c):
        assert (a & b) & c is a & (b & c)


class TestContains:
    """Tests for implication between relations."""

    @pytest.mark.parametrize("r", ALL)
    def test_reflexive(self, r):
        assert r in r

    @pytest.mark.parametrize("r", ALL)
    def test_equivalent_contains_everything(self, r):
        assert r in EQ

    @pytest.mark.parametrize("r", ALL)
    def test_everything_contains_unrelated(self, r):
        assert UN in r

    def test_directions_do_not_imply_each_other(self):
        assert SUB not in SUP
        assert SUP not in SUB
        assert SUB not in UN
        assert EQ not in SUB


class TestFromFlags:
    def test_all_combinations(self):
        assert SubtypingRelation.from_flags(True, True) is EQ
        assert SubtypingRelation.from_flags(True, False) is SUB
        assert SubtypingRelation.from_flags(False, True) is SUP
        assert SubtypingRelation.from_flags(False, False) is UN
