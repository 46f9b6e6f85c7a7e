"""
Emergency Referral Checklist

Embedded catalog for obstetric emergency referrals. Danger signs map to four
categories; each category has a priority profile that decides which items the
referring clinician sees first.

Category precedence (most severe first):
    Neurological > Bleeding & Delivery > Hypertensive > Systemic
"""
from __future__ import annotations

from enum import Enum

from .base import (
    CategoryPriorityProfile,
    ChecklistCatalog,
    ChecklistItem,
    ChecklistSection,
)


class DangerSign(str, Enum):
    VAGINAL_BLEEDING      = "Vaginal bleeding"
    DRAINING              = "Draining"
    IMMINENT_DELIVERY     = "Imminent delivery"
    LABOUR                = "Labour"
    CONVULSING            = "Convulsing"
    UNCONSCIOUS           = "Unconscious"
    SEVERE_HEADACHE       = "Severe headache"
    VISUAL_DISTURBANCE    = "Visual disturbance"
    FEVER                 = "Fever"
    LOOKS_VERY_ILL        = "Looks very ill"
    SEVERE_VOMITING       = "Severe vomiting"
    SEVERE_ABDOMINAL_PAIN = "Severe abdominal pain"


class DangerSignCategory(str, Enum):
    NEUROLOGICAL      = "Neurological"
    BLEEDING_DELIVERY = "Bleeding & Delivery"
    HYPERTENSIVE      = "Hypertensive"
    SYSTEMIC          = "Systemic"


_S = ChecklistSection

REFERRAL_CHECKLIST_ITEMS = (
    # Communication
    ChecklistItem("facility_contacted", "Receiving facility contacted", _S.COMMUNICATION, True),
    ChecklistItem("reason_communicated", "Reason for referral communicated", _S.COMMUNICATION, True),
    ChecklistItem("patient_condition_discussed", "Patient condition discussed with receiving team", _S.COMMUNICATION, True),
    # Procedures
    ChecklistItem("iv_access_secured", "IV access secured", _S.PROCEDURES, True),
    ChecklistItem("urinary_catheter", "Urinary catheter inserted", _S.PROCEDURES),
    ChecklistItem("blood_samples", "Blood samples collected", _S.PROCEDURES),
    ChecklistItem("clotting_test", "Bedside clotting test done", _S.PROCEDURES),
    ChecklistItem("urinalysis", "Urinalysis done", _S.PROCEDURES),
    # Medications
    ChecklistItem("iv_fluids", "IV fluids administered", _S.MEDICATIONS),
    ChecklistItem("appropriate_drugs", "Appropriate drugs given", _S.MEDICATIONS),
    ChecklistItem("magnesium_sulfate", "Magnesium sulfate administered (if indicated)", _S.MEDICATIONS),
    ChecklistItem("antibiotics", "Antibiotics administered (if indicated)", _S.MEDICATIONS),
    # Vitals
    ChecklistItem("bp_monitored", "Blood pressure monitored", _S.VITALS, True),
    ChecklistItem("pulse_monitored", "Pulse monitored", _S.VITALS, True),
    ChecklistItem("temp_monitored", "Temperature monitored", _S.VITALS, True),
    ChecklistItem("rr_monitored", "Respiratory rate monitored", _S.VITALS, True),
    # Special
    ChecklistItem("blood_loss_estimated", "Estimated blood loss documented", _S.SPECIAL),
    ChecklistItem("anti_shock_garment", "Anti-shock garment/UBT applied", _S.SPECIAL),
    ChecklistItem("patient_positioned", "Patient positioned appropriately", _S.SPECIAL),
    ChecklistItem("oxygen_administered", "Oxygen administered (if indicated)", _S.SPECIAL),
    # Final
    ChecklistItem("family_discussion", "Details discussed with patient/family", _S.FINAL, True),
    ChecklistItem("referral_form", "Referral form completed", _S.FINAL, True),
    ChecklistItem("referral_register", "Referral register updated", _S.FINAL, True),
    ChecklistItem("handover_notes", "Handover notes prepared", _S.FINAL, True),
)

# Communication and handover items every profile ends with
_HANDOVER = (
    "facility_contacted",
    "reason_communicated",
    "patient_condition_discussed",
)
_PAPERWORK = (
    "family_discussion",
    "referral_form",
    "referral_register",
    "handover_notes",
)

REFERRAL_PRIORITY_PROFILES = {
    DangerSignCategory.BLEEDING_DELIVERY.value: CategoryPriorityProfile(
        category=DangerSignCategory.BLEEDING_DELIVERY.value,
        clinical_focus="Volume replacement, shock management, and preparation for obstetric intervention",
        critical=(
            "blood_loss_estimated",
            "anti_shock_garment",
            "iv_fluids",
            "appropriate_drugs",
            "bp_monitored",
            "pulse_monitored",
        ),
        secondary=(
            "iv_access_secured",
            "blood_samples",
            "clotting_test",
            "urinary_catheter",
            "patient_positioned",
        ),
        standard=_HANDOVER + ("temp_monitored", "rr_monitored") + _PAPERWORK,
    ),
    DangerSignCategory.NEUROLOGICAL.value: CategoryPriorityProfile(
        category=DangerSignCategory.NEUROLOGICAL.value,
        clinical_focus="Seizure control, airway protection (ABCs), and managing severe hypertension",
        critical=(
            "patient_positioned",
            "oxygen_administered",
            "magnesium_sulfate",
            "iv_fluids",
            "bp_monitored",
            "rr_monitored",
        ),
        secondary=(
            "iv_access_secured",
            "urinary_catheter",
            "urinalysis",
            "appropriate_drugs",
            "pulse_monitored",
            "temp_monitored",
        ),
        standard=_HANDOVER + _PAPERWORK,
    ),
    DangerSignCategory.HYPERTENSIVE.value: CategoryPriorityProfile(
        category=DangerSignCategory.HYPERTENSIVE.value,
        clinical_focus="Assessment and prevention of eclampsia, blood pressure management",
        critical=(
            "bp_monitored",
            "urinalysis",
            "iv_access_secured",
            "magnesium_sulfate",
        ),
        secondary=(
            "iv_fluids",
            "appropriate_drugs",
            "pulse_monitored",
            "temp_monitored",
            "rr_monitored",
            "patient_positioned",
        ),
        standard=_HANDOVER + _PAPERWORK,
    ),
    DangerSignCategory.SYSTEMIC.value: CategoryPriorityProfile(
        category=DangerSignCategory.SYSTEMIC.value,
        clinical_focus="Infection control, fluid resuscitation, and sepsis management",
        critical=(
            "iv_fluids",
            "antibiotics",
            "temp_monitored",
            "bp_monitored",
            "pulse_monitored",
        ),
        secondary=(
            "iv_access_secured",
            "blood_samples",
            "urinalysis",
            "appropriate_drugs",
            "rr_monitored",
        ),
        standard=_HANDOVER + _PAPERWORK,
    ),
}

DANGER_SIGN_CATEGORIES = {
    DangerSign.VAGINAL_BLEEDING.value:      DangerSignCategory.BLEEDING_DELIVERY.value,
    DangerSign.DRAINING.value:              DangerSignCategory.BLEEDING_DELIVERY.value,
    DangerSign.IMMINENT_DELIVERY.value:     DangerSignCategory.BLEEDING_DELIVERY.value,
    DangerSign.LABOUR.value:                DangerSignCategory.BLEEDING_DELIVERY.value,
    DangerSign.CONVULSING.value:            DangerSignCategory.NEUROLOGICAL.value,
    DangerSign.UNCONSCIOUS.value:           DangerSignCategory.NEUROLOGICAL.value,
    DangerSign.SEVERE_HEADACHE.value:       DangerSignCategory.HYPERTENSIVE.value,
    DangerSign.VISUAL_DISTURBANCE.value:    DangerSignCategory.HYPERTENSIVE.value,
    DangerSign.FEVER.value:                 DangerSignCategory.SYSTEMIC.value,
    DangerSign.LOOKS_VERY_ILL.value:        DangerSignCategory.SYSTEMIC.value,
    DangerSign.SEVERE_VOMITING.value:       DangerSignCategory.SYSTEMIC.value,
    DangerSign.SEVERE_ABDOMINAL_PAIN.value: DangerSignCategory.SYSTEMIC.value,
}

CATEGORY_PRECEDENCE = (
    DangerSignCategory.NEUROLOGICAL.value,
    DangerSignCategory.BLEEDING_DELIVERY.value,
    DangerSignCategory.HYPERTENSIVE.value,
    DangerSignCategory.SYSTEMIC.value,
)

REFERRAL_CHECKLIST_CATALOG = ChecklistCatalog(
    name="emergency_referral",
    version="2024.1",
    items=REFERRAL_CHECKLIST_ITEMS,
    profiles=REFERRAL_PRIORITY_PROFILES,
    sign_categories=DANGER_SIGN_CATEGORIES,
    category_precedence=CATEGORY_PRECEDENCE,
)
