"""
Intimate Partner Violence (IPV) Screening Rules

Embedded rule catalog for antenatal IPV screening, following the WHO clinical
handbook "Health care for women subjected to intimate partner violence or
sexual violence".

Catalog roles:
  - IPV_NO_SIGNS            baseline, returned when nothing is observed
  - IPV_BEHAVIORAL_SIGNS    default when active signs match no rule
  - IPV_MULTIPLE_INDICATORS combination rule, 3+ active signs
"""
from __future__ import annotations

from enum import Enum

from .base import AlertSeverity, RiskLevel, RuleCatalog, RuleDefinition

WHO_IPV_HANDBOOK = (
    "WHO Health care for women subjected to intimate partner violence or "
    "sexual violence - Clinical handbook"
)


class IPVSign(str, Enum):
    """Observable IPV signs, as presented on the screening form."""

    # Sentinels
    NO_SIGNS = "No presenting signs or symptoms indicative of IPV"
    DISCLOSURE = "Woman discloses or is suspected to be subjected to intimate partner violence"

    # Behavioural
    INTRUSIVE_PARTNER = "Woman's partner or husband is intrusive during consultations"
    MISSED_APPOINTMENTS = "Woman often misses her own or her children's health-care appointments"
    CHILD_BEHAVIOUR_PROBLEMS = "Children have emotional and behavioural problems"

    # Psychological
    ONGOING_STRESS = "Ongoing stress"
    ONGOING_ANXIETY = "Ongoing anxiety"
    ONGOING_DEPRESSION = "Ongoing depression"
    EMOTIONAL_HEALTH_ISSUES = "Unspecified ongoing emotional health issues"
    ALCOHOL_MISUSE = "Misuse of alcohol"
    DRUG_MISUSE = "Misuse of drugs"
    HARMFUL_BEHAVIOURS = "Unspecified harmful behaviours"
    SELF_HARM_THOUGHTS = "Thoughts of self-harm or (attempted) suicide"
    SELF_HARM_PLANS = "Plans of self-harm or (attempt) suicide"

    # Physical
    REPEATED_STIS = "Repeated sexually transmitted infections (STIs)"
    UNWANTED_PREGNANCIES = "Unwanted pregnancies"
    CHRONIC_PAIN = "Unexplained chronic pain"
    CHRONIC_GI_SYMPTOMS = "Unexplained chronic gastrointestinal symptoms"
    GENITOURINARY_SYMPTOMS = "Unexplained genitourinary symptoms"
    ADVERSE_REPRODUCTIVE_OUTCOMES = "Adverse reproductive outcomes"
    REPRODUCTIVE_SYMPTOMS = "Unexplained reproductive symptoms"
    REPEATED_VAGINAL_BLEEDING = "Repeated vaginal bleeding"
    ABDOMINAL_INJURY = "Injury to abdomen"
    OTHER_INJURY = "Injury other (specify)"
    CNS_PROBLEMS = "Problems with central nervous system"
    REPEATED_CONSULTATIONS = "Repeated health consultations with no clear diagnosis"


IPV_RULES = (
    RuleDefinition(
        id="IPV.01",
        code="IPV_NO_SIGNS",
        name="No IPV Signs Detected",
        rationale="When no IPV signs are present, continue routine care with general safety information",
        trigger_set=(IPVSign.NO_SIGNS,),
        risk_level=RiskLevel.NONE,
        alert_severity=AlertSeverity.BLUE,
        alert_title="No IPV Risk Indicators",
        alert_message="No current signs of IPV detected. Continue routine care.",
        recommendations=(
            "Continue standard antenatal care",
            "Provide general information about healthy relationships",
            "Ensure patient knows IPV resources are available if needed",
        ),
        safety_considerations=(
            "IPV can develop or escalate during pregnancy",
            "Maintain open, non-judgmental communication",
        ),
        reference=WHO_IPV_HANDBOOK,
    ),
    RuleDefinition(
        id="IPV.02",
        code="IPV_BEHAVIORAL_SIGNS",
        name="Behavioral IPV Indicators",
        rationale="Behavioral signs may indicate early or low-level IPV requiring enhanced support",
        trigger_set=(
            IPVSign.INTRUSIVE_PARTNER,
            IPVSign.MISSED_APPOINTMENTS,
            IPVSign.CHILD_BEHAVIOUR_PROBLEMS,
        ),
        risk_level=RiskLevel.LOW,
        alert_severity=AlertSeverity.YELLOW,
        alert_title="Behavioral IPV Risk Indicators",
        alert_message="Behavioral patterns suggest possible IPV. Enhanced assessment and support recommended.",
        recommendations=(
            "Conduct private consultation when safe to do so",
            "Provide IPV information and resources discretely",
            "Assess patient's safety concerns and support needs",
            "Document observations professionally and confidentially",
        ),
        safety_considerations=(
            "Ensure partner cannot access patient records",
            "Do not confront partner about behavior",
            "Respect patient's choices about disclosure",
        ),
        reference=WHO_IPV_HANDBOOK,
    ),
    RuleDefinition(
        id="IPV.03",
        code="IPV_PSYCHOLOGICAL_IMPACT",
        name="Psychological IPV Impact",
        rationale="Psychological symptoms often indicate ongoing IPV requiring specialized support",
        trigger_set=(
            IPVSign.ONGOING_STRESS,
            IPVSign.ONGOING_ANXIETY,
            IPVSign.ONGOING_DEPRESSION,
            IPVSign.EMOTIONAL_HEALTH_ISSUES,
            IPVSign.ALCOHOL_MISUSE,
            IPVSign.DRUG_MISUSE,
            IPVSign.HARMFUL_BEHAVIOURS,
            IPVSign.SELF_HARM_THOUGHTS,
            IPVSign.SELF_HARM_PLANS,
        ),
        risk_level=RiskLevel.MEDIUM,
        alert_severity=AlertSeverity.ORANGE,
        alert_title="Psychological IPV Impact Detected",
        alert_message="Signs suggest psychological impact of IPV. Mental health support and safety assessment needed.",
        recommendations=(
            "Conduct comprehensive mental health screening",
            "Provide specialized IPV counseling referral",
            "Develop safety plan with patient",
            "Consider psychosocial support services",
            "Schedule more frequent follow-up appointments",
        ),
        safety_considerations=(
            "Risk of suicide may be elevated",
            "Patient may minimize danger due to psychological impact",
            "Ensure immediate mental health support is available",
        ),
        referral_required=True,
        reference=WHO_IPV_HANDBOOK,
    ),
    RuleDefinition(
        id="IPV.04",
        code="IPV_PHYSICAL_INDICATORS",
        name="Physical IPV Indicators",
        rationale="Physical symptoms and care patterns suggest active IPV requiring immediate intervention",
        trigger_set=(
            IPVSign.REPEATED_STIS,
            IPVSign.UNWANTED_PREGNANCIES,
            IPVSign.CHRONIC_PAIN,
            IPVSign.CHRONIC_GI_SYMPTOMS,
            IPVSign.GENITOURINARY_SYMPTOMS,
            IPVSign.ADVERSE_REPRODUCTIVE_OUTCOMES,
            IPVSign.REPRODUCTIVE_SYMPTOMS,
            IPVSign.REPEATED_VAGINAL_BLEEDING,
            IPVSign.ABDOMINAL_INJURY,
            IPVSign.OTHER_INJURY,
            IPVSign.CNS_PROBLEMS,
            IPVSign.REPEATED_CONSULTATIONS,
        ),
        risk_level=RiskLevel.HIGH,
        alert_severity=AlertSeverity.ORANGE,
        alert_title="Physical IPV Indicators Present",
        alert_message="Physical signs and care patterns suggest active IPV. Immediate assessment and intervention required.",
        recommendations=(
            "Conduct thorough physical examination when safe",
            "Document injuries with photos if consented and safe",
            "Provide immediate IPV specialist referral",
            "Develop comprehensive safety plan",
            "Consider emergency accommodation if needed",
            "Coordinate with social services and legal support",
        ),
        safety_considerations=(
            "Patient safety is paramount - do not increase risk",
            "Violence may escalate if partner suspects disclosure",
            "Have emergency contact information readily available",
        ),
        referral_required=True,
        urgent_action=True,
        reference=WHO_IPV_HANDBOOK,
    ),
    RuleDefinition(
        id="IPV.05",
        code="IPV_MULTIPLE_INDICATORS",
        name="Multiple IPV Risk Factors",
        rationale="Multiple IPV indicators suggest high risk requiring comprehensive intervention",
        trigger_set=(),
        risk_level=RiskLevel.HIGH,
        alert_severity=AlertSeverity.RED,
        alert_title="Multiple IPV Risk Factors Detected",
        alert_message=(
            "Multiple signs indicate high IPV risk. Comprehensive safety assessment "
            "and immediate intervention required."
        ),
        recommendations=(
            "Conduct immediate comprehensive safety assessment",
            "Activate multi-disciplinary IPV response team",
            "Develop detailed safety plan with patient",
            "Provide emergency contact numbers and resources",
            "Consider emergency shelter referral if safe and desired",
            "Coordinate with police and legal services if appropriate",
            "Schedule urgent follow-up within 24-48 hours",
        ),
        safety_considerations=(
            "High risk of escalation - prioritize immediate safety",
            "Multiple exit strategies should be discussed",
            "Emergency services should be readily accessible",
        ),
        referral_required=True,
        urgent_action=True,
        reference=WHO_IPV_HANDBOOK,
    ),
)


IPV_RULE_CATALOG = RuleCatalog(
    name="ipv_screening",
    version="2024.1",
    rules=IPV_RULES,
    baseline_code="IPV_NO_SIGNS",
    default_code="IPV_BEHAVIORAL_SIGNS",
    no_signs_sentinel=IPVSign.NO_SIGNS,
    excluded_sentinels=frozenset({IPVSign.DISCLOSURE}),
    combination_threshold=3,
)
