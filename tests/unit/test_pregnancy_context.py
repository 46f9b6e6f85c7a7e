"""
Unit Tests for Pregnancy Context Validation

Tests for gestational age dating, obstetric history and danger-sign
combinations.
"""
import pytest
from datetime import date, datetime

from clinical_rules.core.validation import (
    GestationalAge,
    ObstetricHistory,
    ObstetricRiskLevel,
    ParityCategory,
    calculate_parity_category,
    estimated_due_date,
    get_trimester,
    validate_danger_sign_combinations,
    validate_gestational_age,
    validate_gestational_age_consistency,
    validate_obstetric_history,
)


TODAY = date(2024, 3, 1)


class TestGestationalAge:
    """Tests for gestational age dating."""

    def test_from_lmp(self):
        """Test 60 days after LMP is 8 weeks 4 days, first trimester."""
        result = validate_gestational_age(lmp=date(2024, 1, 1), now=TODAY)

        assert result.valid
        assert result.gestational_age == GestationalAge(weeks=8, days=4)
        assert result.gestational_age.trimester == 1
        assert str(result.gestational_age) == "8 weeks, 4 days"

    def test_from_edd(self):
        """Test EDD-only dating derives LMP with Naegele's rule."""
        lmp = date(2023, 9, 1)
        result = validate_gestational_age(edd=estimated_due_date(lmp), now=TODAY)

        assert result.lmp == lmp
        assert result.gestational_age.total_days == (TODAY - lmp).days

    def test_edd_and_derived_lmp_agree(self):
        """Test dating from EDD and from the LMP it implies give the same GA."""
        from_edd = validate_gestational_age(edd=date(2024, 6, 20), now=TODAY)
        from_lmp = validate_gestational_age(lmp=from_edd.lmp, now=TODAY)

        assert from_edd.valid and from_lmp.valid
        assert from_lmp.gestational_age == from_edd.gestational_age

    def test_accepts_datetimes(self):
        """Test datetime inputs are reduced to dates."""
        result = validate_gestational_age(lmp=datetime(2024, 1, 1, 15, 30), now=datetime(2024, 3, 1, 8, 0))

        assert result.gestational_age.total_days == 60

    def test_missing_dates(self):
        """Test LMP or EDD is required."""
        result = validate_gestational_age(now=TODAY)

        assert not result.valid
        assert result.gestational_age is None

    def test_future_lmp(self):
        """Test a future LMP is an error."""
        result = validate_gestational_age(lmp=date(2024, 4, 1), now=TODAY)

        assert not result.valid
        assert "future" in result.errors[0]

    def test_beyond_45_weeks(self):
        """Test more than 45 weeks since LMP is an error."""
        result = validate_gestational_age(lmp=date(2023, 4, 1), now=TODAY)

        assert not result.valid
        assert "exceeds 45 weeks" in result.errors[0]

    def test_post_term_warning(self):
        """Test 42+ weeks is valid with a post-term warning."""
        result = validate_gestational_age(lmp=date(2023, 5, 10), now=TODAY)

        assert result.valid
        assert result.gestational_age.weeks >= 42
        assert "Post-term" in result.warnings[0]

    @pytest.mark.parametrize("weeks,trimester", [(0, 1), (13, 1), (14, 2), (27, 2), (28, 3), (41, 3)])
    def test_trimester_boundaries(self, weeks, trimester):
        """Test trimester cut-offs at 14 and 28 weeks."""
        assert get_trimester(weeks) == trimester

    def test_due_date(self):
        """Test EDD is LMP plus 280 days."""
        assert estimated_due_date(date(2024, 1, 1)) == date(2024, 10, 7)

    def test_to_dict(self):
        """Test serialisation."""
        data = validate_gestational_age(lmp=date(2024, 1, 1), now=TODAY).to_dict()

        assert data["gestational_age"] == {"weeks": 8, "days": 4}
        assert data["lmp"] == "2024-01-01"


class TestDatingConsistency:
    """Tests for validate_gestational_age_consistency."""

    def test_lmp_ultrasound_discrepancy(self):
        """Test more than 14 days between LMP and ultrasound warns."""
        result = validate_gestational_age_consistency(
            lmp_ga=GestationalAge(20, 0), ultrasound_ga=GestationalAge(22, 1)
        )

        assert result.valid
        assert result.warnings == ("LMP and ultrasound dating differ by 15 days",)

    def test_within_tolerance(self):
        """Test 14 days is tolerated."""
        result = validate_gestational_age_consistency(
            lmp_ga=GestationalAge(20, 0), ultrasound_ga=GestationalAge(22, 0)
        )

        assert result.warnings == ()

    def test_sfh_ultrasound_discrepancy(self):
        """Test more than 21 days between SFH and ultrasound warns."""
        result = validate_gestational_age_consistency(
            ultrasound_ga=GestationalAge(20, 6), sfh_ga=GestationalAge(24, 0)
        )

        assert "possible IUGR or macrosomia" in result.warnings[0]

    def test_without_ultrasound(self):
        """Test no comparison is possible without the ultrasound reference."""
        result = validate_gestational_age_consistency(
            lmp_ga=GestationalAge(20, 0), sfh_ga=GestationalAge(30, 0)
        )

        assert result.warnings == ()


class TestObstetricHistory:
    """Tests for validate_obstetric_history."""

    @pytest.mark.parametrize("para,category", [
        (0, ParityCategory.NULLIPARA),
        (1, ParityCategory.PRIMIPARA),
        (4, ParityCategory.MULTIPARA),
        (5, ParityCategory.GRAND_MULTIPARA),
    ])
    def test_parity_category(self, para, category):
        """Test parity categories."""
        assert calculate_parity_category(para) == category

    def test_first_pregnancy(self):
        """Test a primigravida is low risk with first-birth advice."""
        result = validate_obstetric_history(ObstetricHistory(gravida=1, para=0))

        assert result.valid
        assert result.parity_category == ParityCategory.NULLIPARA
        assert result.risk_level == ObstetricRiskLevel.LOW
        assert not result.requires_specialist_consultation
        assert result.recommendations[0].startswith("First birth")

    def test_grand_multigravida(self):
        """Test five pregnancies is moderate risk with specialist input."""
        result = validate_obstetric_history(ObstetricHistory(gravida=5, para=4, abortions=0, living_children=4))

        assert result.parity_category == ParityCategory.MULTIPARA
        assert result.risk_level == ObstetricRiskLevel.MODERATE
        assert result.requires_specialist_consultation
        assert len(result.warnings) == 1

    def test_high_parity(self):
        """Test more than six births is high risk."""
        result = validate_obstetric_history(ObstetricHistory(gravida=8, para=7, living_children=7))

        assert result.risk_level == ObstetricRiskLevel.HIGH
        assert any("High parity" in w for w in result.warnings)

    def test_recurrent_loss(self):
        """Test three losses is high risk."""
        result = validate_obstetric_history(ObstetricHistory(gravida=4, para=0, abortions=3))

        assert result.risk_level == ObstetricRiskLevel.HIGH
        assert any("Recurrent pregnancy loss" in w for w in result.warnings)

    def test_perinatal_loss_rate(self):
        """Test losing two of three children raises risk to moderate."""
        result = validate_obstetric_history(ObstetricHistory(gravida=4, para=3, living_children=1))

        assert result.risk_level == ObstetricRiskLevel.MODERATE
        assert "High perinatal loss rate (66.7%)" in result.warnings

    def test_risk_never_lowered(self):
        """Test a later moderate finding does not lower a high grading."""
        result = validate_obstetric_history(ObstetricHistory(gravida=8, para=7, living_children=2))

        assert result.risk_level == ObstetricRiskLevel.HIGH

    def test_totals_exceed_gravida(self):
        """Test para plus abortions cannot exceed gravida."""
        result = validate_obstetric_history(ObstetricHistory(gravida=3, para=2, abortions=2, living_children=2))

        assert not result.valid
        assert result.risk_level is None
        assert "cannot exceed gravida" in result.errors[0]

    def test_living_exceeds_para(self):
        """Test living children cannot exceed para."""
        result = validate_obstetric_history(ObstetricHistory(gravida=3, para=1, living_children=2))

        assert not result.valid

    def test_bounds(self):
        """Test hard bounds on each count."""
        assert not validate_obstetric_history(ObstetricHistory(gravida=0, para=0)).valid
        assert not validate_obstetric_history(ObstetricHistory(gravida=21, para=0)).valid
        assert not validate_obstetric_history(ObstetricHistory(gravida=20, para=0, abortions=11)).valid

    def test_to_dict(self):
        """Test serialisation."""
        data = validate_obstetric_history(ObstetricHistory(gravida=2, para=1, living_children=1)).to_dict()

        assert data["valid"] is True
        assert data["parity_category"] == "primipara"
        assert data["risk_level"] == "low"


class TestDangerSignCombinations:
    """Tests for validate_danger_sign_combinations."""

    def test_unconscious_cannot_report_symptoms(self):
        """Test reported symptoms conflict with unconsciousness."""
        result = validate_danger_sign_combinations(["Unconscious", "Severe headache", "Visual disturbance"])

        assert not result.valid
        assert len(result.issues) == 2
        assert "Focus on objective signs for unconscious patient" in result.recommendations

    def test_headache_prompts_visual_check(self):
        """Test headache without visual disturbance suggests a pre-eclampsia screen."""
        result = validate_danger_sign_combinations(["Severe headache"])

        assert result.valid
        assert "pre-eclampsia" in result.recommendations[0]

    def test_fever_prompts_general_appearance(self):
        """Test fever alone suggests assessing general appearance."""
        assert validate_danger_sign_combinations(["Fever"]).recommendations == (
            "Assess general appearance with fever",
        )
        assert validate_danger_sign_combinations(["Fever", "Looks very ill"]).recommendations == ()

    def test_possible_abruption(self):
        """Test bleeding with severe abdominal pain is urgent."""
        result = validate_danger_sign_combinations(["Vaginal bleeding", "Severe abdominal pain"])

        assert result.recommendations[-1].startswith("URGENT: Possible placental abruption")

    def test_empty(self):
        """Test no signs, no findings."""
        assert validate_danger_sign_combinations([]).to_dict() == {
            "valid": True, "issues": [], "recommendations": [],
        }
