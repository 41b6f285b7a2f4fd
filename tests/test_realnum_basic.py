"""Basic RealNumber behavior - creation, coercion, conversion, formatting"""
import fractions
import math
import warnings
from decimal import Decimal

import pytest
from py_realvec import RealNumber, Fraction, Approximate, RealKind, coerce_real
from py_realvec import INT64_MAX, INT64_MIN
from py_realvec.errors import (
    FractionOverflowError,
    LossyConversionWarning,
    RealVecTypeError,
    ZeroDenominatorError,
)


class TestCreation:
    """Test constructors and invariants of both variants"""

    def test_from_fraction(self):
        r = RealNumber.from_fraction(1, 3)
        assert r == Fraction(1, 3)
        assert r.numerator == 1
        assert r.denominator == 3
        assert r.kind is RealKind.FRACTION
        assert r.is_fraction and not r.is_approximate

    def test_from_approximate(self):
        r = RealNumber.from_approximate(2.5)
        assert r.value == Decimal("2.5")
        assert r.kind is RealKind.APPROXIMATE
        assert r.is_approximate and not r.is_fraction

    def test_zero_is_fraction(self):
        assert RealNumber.zero() == Fraction(0, 1)

    def test_zero_denominator_rejected(self):
        with pytest.raises(ZeroDenominatorError):
            Fraction(1, 0)

    @pytest.mark.parametrize("num,den", [
        (INT64_MAX + 1, 1),
        (1, INT64_MIN - 1),
    ])
    def test_components_must_fit_int64(self, num, den):
        with pytest.raises(FractionOverflowError):
            Fraction(num, den)

    def test_int64_bounds_accepted(self):
        r = Fraction(INT64_MIN, INT64_MAX)
        assert r.numerator == INT64_MIN

    @pytest.mark.parametrize("num,den", [(1.5, 2), (1, "2"), (True, 1)])
    def test_components_must_be_int(self, num, den):
        with pytest.raises(RealVecTypeError):
            Fraction(num, den)

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), "not a number"])
    def test_approximate_must_be_finite_number(self, value):
        with pytest.raises(RealVecTypeError):
            Approximate(value)

    def test_approximate_rounds_to_quad_precision(self):
        r = Approximate(Decimal("1." + "1" * 40))
        assert len(r.value.as_tuple().digits) == 34

    def test_values_are_immutable(self):
        r = Fraction(1, 2)
        with pytest.raises(AttributeError):
            r.numerator = 5


class TestCoercion:
    """Plain Python numbers used where a RealNumber is expected"""

    @pytest.mark.parametrize("value,expected", [
        (3, Fraction(3, 1)),
        (fractions.Fraction(2, 4), Fraction(1, 2)),
        (0.5, Approximate("0.5")),
        (Decimal("1.25"), Approximate("1.25")),
    ])
    def test_coerce_real(self, value, expected):
        assert coerce_real(value) == expected

    def test_realnumber_passes_through(self):
        r = Fraction(1, 7)
        assert coerce_real(r) is r

    @pytest.mark.parametrize("value", [True, None, [1], object()])
    def test_coerce_rejects(self, value):
        with pytest.raises(RealVecTypeError):
            coerce_real(value)


class TestConversion:
    """as_fraction / as_approximate / simplify"""

    def test_fraction_as_approximate(self):
        assert Fraction(1, 4).as_approximate() == Approximate("0.25")

    def test_approximate_as_approximate_is_identity(self):
        r = Approximate("1.5")
        assert r.as_approximate() == r

    @pytest.mark.parametrize("text,expected", [
        ("0.1", Fraction(1, 10)),
        ("0.75", Fraction(3, 4)),
        ("-2.5", Fraction(-5, 2)),
        ("42", Fraction(42, 1)),
    ])
    def test_exact_decimal_as_fraction(self, text, expected):
        assert Approximate(text).as_fraction() == expected

    def test_repeating_decimal_as_fraction_warns(self):
        third = Fraction(1, 3).as_approximate()
        with pytest.warns(LossyConversionWarning):
            assert third.as_fraction() == Fraction(1, 3)

    def test_too_large_for_fraction(self):
        with pytest.raises(FractionOverflowError):
            Approximate("1e30").as_fraction()

    @pytest.mark.parametrize("value", [
        math.pi,
        "2.718281828459045235360287471352662",
        "-1234567.891011121314151617181920212",
        "9.2e18",
    ])
    def test_irrational_as_fraction_fits_int64(self, value):
        r = Approximate(value)
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", LossyConversionWarning)
            f = r.as_fraction()
        assert INT64_MIN <= f.numerator <= INT64_MAX
        assert 0 < f.denominator <= INT64_MAX
        assert float(f.as_approximate()) == pytest.approx(float(r), rel=1e-15)

    def test_pi_as_fraction_warns(self):
        with pytest.warns(LossyConversionWarning):
            f = Approximate(math.pi).as_fraction()
        assert float(f) == pytest.approx(math.pi, rel=1e-15)

    def test_square_root_as_fraction_string(self):
        root2 = Approximate("2").square_root()
        with pytest.warns(LossyConversionWarning):
            text = root2.to_fraction_string()
        num, den = (int(part) for part in text.split("/"))
        assert num / den == pytest.approx(math.sqrt(2), rel=1e-15)

    @pytest.mark.filterwarnings("ignore::py_realvec.errors.LossyConversionWarning")
    @pytest.mark.parametrize("r", [
        Fraction(1, 3),
        Fraction(-22, 7),
        Approximate(0.1),
        Approximate("3.14159"),
        Approximate("2.718281828459045235360287471352662"),
        Approximate("-12345.6789"),
    ])
    def test_round_trip_through_fraction(self, r):
        back = r.as_fraction().as_approximate()
        assert float(back) == pytest.approx(float(r.as_approximate()), rel=1e-15)

    def test_simplify(self):
        assert Fraction(6, 9).simplify() == Fraction(2, 3)

    @pytest.mark.parametrize("r,expected", [
        (Fraction(0, 7), Fraction(0, 1)),
        (Fraction(2, -4), Fraction(-1, 2)),
        (Fraction(-3, -9), Fraction(1, 3)),
        (Fraction(5, 1), Fraction(5, 1)),
    ])
    def test_simplify_sign_and_zero(self, r, expected):
        assert r.simplify() == expected

    def test_simplify_approximate_is_identity(self):
        r = Approximate("0.5")
        assert r.simplify() is r


class TestFormatting:
    """Textual forms of both variants"""

    @pytest.mark.parametrize("r,expected", [
        (Fraction(2, 3), "2/3"),
        (Fraction(-2, 3), "-2/3"),
        (Fraction(6, 9), "6/9"),
    ])
    def test_fraction_to_string(self, r, expected):
        assert r.to_string() == expected
        assert r.to_string(2) == expected

    @pytest.mark.parametrize("text,precision,expected", [
        ("3.14159", 2, "3.14"),
        ("3.14159", 0, "3"),
        ("2.5", 0, "2"),
        ("3.5", 0, "4"),
        ("1", 3, "1.000"),
        ("-0.0001", 2, "-0.00"),
    ])
    def test_approximate_to_string(self, text, precision, expected):
        assert Approximate(text).to_string(precision) == expected

    def test_to_fraction_string(self):
        assert Approximate("0.75").to_fraction_string() == "3/4"
        assert Fraction(6, 9).to_fraction_string() == "6/9"

    def test_to_approximate_string(self):
        assert Fraction(1, 3).to_approximate_string(4) == "0.3333"
        assert Fraction(2, 3).to_approximate_string(2) == "0.67"

    def test_str_uses_default_precision(self):
        assert str(Fraction(1, 2)) == "1/2"
        assert str(Approximate("1.5")) == "1.500000"

    def test_repr(self):
        assert repr(Fraction(1, 2)) == "Fraction(1, 2)"
        assert repr(Approximate("1.5")) == "Approximate('1.5')"

    def test_negative_precision(self):
        with pytest.raises(ValueError):
            Approximate("1.5").to_string(-1)
