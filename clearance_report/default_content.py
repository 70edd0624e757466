"""Default Template Content

Built-in section texts for non-friable, friable and mixed clearance
certificates. Texts use ``{TOKEN}`` placeholders, blank lines between
paragraphs and "•" bullet lines.
"""
from typing import Dict

from .models import DocumentTemplate, normalize_clearance_type

# Section keys, in the order they appear in the document
MAIN_BODY_SECTIONS = (
    "inspection_details",
    "inspection_exclusions",
    "clearance_certification",
)
BACKGROUND_SECTIONS = (
    "background_information",
    "legislative_requirements",
    "limitations",
)

COMMON_SECTIONS: Dict[str, str] = {
    "inspection_details_title": "INSPECTION DETAILS",
    "inspection_details": (
        "Following discussions with {CLIENT_NAME}, Lancaster and Dickenson Consulting (L & D) "
        "were contracted to undertake a visual clearance inspection following the removal of "
        "{ASBESTOS_TYPE} asbestos from {SITE_NAME} (herein referred to as 'the Site').\n\n"
        "Asbestos removal works were undertaken by {ASBESTOS_REMOVALIST}. {LAA_NAME} "
        "(ACT Licensed Asbestos Assessor - {LAA_LICENSE}) from L&D visited the Site at "
        "{INSPECTION_TIME} on {INSPECTION_DATE}.\n\n"
        "Table 1 below outlines the ACM that formed part of the inspection. {APPENDIX_REFERENCES}"
    ),
    "inspection_exclusions_title": "INSPECTION EXCLUSIONS",
    "inspection_exclusions": (
        "This clearance certificate is specific to the scope of removal works detailed above. "
        "ACM may be present beyond the inspected area."
    ),
    "clearance_certification_title": "CLEARANCE CERTIFICATION",
    "sign_off": (
        "Please do not hesitate to contact the undersigned should you have any queries "
        "regarding this report.\n\n"
        "For and on behalf of Lancaster and Dickenson Consulting.\n\n"
        "{LAA_NAME}\n"
        "Licensed Asbestos Assessor - {LAA_LICENSE}"
    ),
    "legislative_requirements_title": "LEGISLATIVE REQUIREMENTS",
    "legislative_requirements": (
        "{REPORT_TYPE} Clearance Certificates should be written in general accordance with "
        "and with reference to:\n\n"
        "• ACT Work Health and Safety (WHS) Act 2011\n"
        "• ACT Work Health and Safety Regulation 2011\n"
        "• ACT Work Health and Safety (How to Safely Remove Asbestos Code of Practice) 2022"
    ),
    "limitations": (
        "The visual clearance inspection was only carried out in the locations outlined within "
        "this document. L&D did not inspect any areas of the property that fall outside of the "
        "locations listed in this certificate and therefore make no comment regarding the "
        "presence or condition of other ACM that may or may not be present. When undertaking "
        "the inspection, the LAA tries to inspect as much of the asbestos removal area as "
        "possible. However, no inspection is absolute. Should suspect ACM be identified "
        "following the inspection, works should cease until an assessment of the materials "
        "is completed."
    ),
}

NON_FRIABLE_SECTIONS: Dict[str, str] = {
    "clearance_certification": (
        "An inspection of the asbestos removal area and the surrounding areas (including access "
        "and egress pathways) was undertaken on {INSPECTION_DATE}. The LAA found no visible "
        "asbestos residue from asbestos removal work in the asbestos removal area, or in the "
        "vicinity of the area, where the asbestos removal works were carried out.\n\n"
        "{AIR_MONITORING_TEXT}\n\n"
        "The LAA considers that the asbestos removal area does not pose a risk to health and "
        "safety from exposure to asbestos and may be re-occupied."
    ),
    "background_information_title": "BACKGROUND INFORMATION REGARDING NON-FRIABLE CLEARANCE INSPECTIONS",
    "background_information": (
        "Following completion of non-friable asbestos removal works undertaken by a suitably "
        "licenced Asbestos Removal Contractor, a clearance inspection must be completed by an "
        "independent LAA / a competent person. The clearance inspection includes an assessment "
        "of the following:\n\n"
        "• Visual inspection of the work area for asbestos dust or debris\n"
        "• Visual inspection of the adjacent area including the access and egress pathways for "
        "visible asbestos dust and debris\n\n"
        "It is required that a Non-Friable Clearance Certificate be issued on completion of a "
        "successful inspection. The issuer needs to ensure:\n\n"
        "• This certificate should be issued prior to the area being re-occupied. This chain of "
        "events should occur regardless of whether the site is a commercial or residential property.\n"
        "• The asbestos removal area and areas immediately surrounding it are visibly clean from "
        "asbestos contamination\n"
        "• The removal area does not pose a risk to health and safety from exposure to asbestos"
    ),
    "limitations_title": "NON-FRIABLE CLEARANCE CERTIFICATE LIMITATIONS",
}

FRIABLE_SECTIONS: Dict[str, str] = {
    "clearance_certification": (
        "An inspection of the asbestos removal area and the surrounding areas (including access "
        "and egress pathways) was undertaken on {INSPECTION_DATE}. The LAA found no visible "
        "asbestos residue from asbestos removal work in the asbestos removal area, or in the "
        "vicinity of the area, where the asbestos removal works were carried out.\n\n"
        "{AIR_MONITORING_TEXT}\n\n"
        "The LAA considers that the asbestos removal area does not pose a risk to health and "
        "safety from exposure to asbestos and the enclosure may be dismantled and the area "
        "re-occupied."
    ),
    "background_information_title": "BACKGROUND INFORMATION REGARDING FRIABLE CLEARANCE INSPECTIONS",
    "background_information": (
        "Following completion of friable asbestos removal works undertaken by a suitably "
        "licenced Class A Asbestos Removal Contractor, a clearance inspection must be completed "
        "by an independent LAA. The clearance inspection includes an assessment of the "
        "following:\n\n"
        "• Visual inspection of the enclosure and work area for asbestos dust or debris\n"
        "• Visual inspection of the adjacent area including the access and egress pathways for "
        "visible asbestos dust and debris\n"
        "• Clearance air monitoring inside the enclosure prior to its dismantling\n\n"
        "It is required that a Friable Clearance Certificate be issued on completion of a "
        "successful inspection. The issuer needs to ensure:\n\n"
        "• Airborne asbestos fibre levels are below the clearance indicator of 0.01 fibres per mL\n"
        "• The asbestos removal area and areas immediately surrounding it are visibly clean from "
        "asbestos contamination\n"
        "• The removal area does not pose a risk to health and safety from exposure to asbestos"
    ),
    "limitations_title": "FRIABLE CLEARANCE CERTIFICATE LIMITATIONS",
}

MIXED_SECTIONS: Dict[str, str] = {
    "clearance_certification": (
        "An inspection of the friable and non-friable asbestos removal areas and the surrounding "
        "areas (including access and egress pathways) was undertaken on {INSPECTION_DATE}. The "
        "LAA found no visible asbestos residue from asbestos removal work in the asbestos "
        "removal areas, or in the vicinity of the areas, where the asbestos removal works were "
        "carried out.\n\n"
        "{AIR_MONITORING_TEXT}\n\n"
        "The LAA considers that the asbestos removal areas do not pose a risk to health and "
        "safety from exposure to asbestos and may be re-occupied."
    ),
    "background_information_title": "BACKGROUND INFORMATION REGARDING MIXED CLEARANCE INSPECTIONS",
    "background_information": (
        "The removal works covered by this certificate included both friable and non-friable "
        "asbestos. Following completion of the works by a suitably licenced Asbestos Removal "
        "Contractor, a clearance inspection must be completed by an independent LAA. The "
        "clearance inspection includes an assessment of the following:\n\n"
        "• Visual inspection of each work area for asbestos dust or debris\n"
        "• Visual inspection of the adjacent areas including the access and egress pathways for "
        "visible asbestos dust and debris\n"
        "• Clearance air monitoring for the friable removal areas\n\n"
        "The issuer needs to ensure:\n\n"
        "• This certificate is issued prior to the areas being re-occupied\n"
        "• The asbestos removal areas and areas immediately surrounding them are visibly clean "
        "from asbestos contamination"
    ),
    "limitations_title": "MIXED CLEARANCE CERTIFICATE LIMITATIONS",
}

_TYPE_SECTIONS = {
    "Non-friable": NON_FRIABLE_SECTIONS,
    "Friable": FRIABLE_SECTIONS,
    "Mixed": MIXED_SECTIONS,
}


def default_template(clearance_type: str = "Non-friable") -> DocumentTemplate:
    """
    Return the built-in template for a clearance type.

    Args:
        clearance_type: "Non-friable", "Friable" or "Mixed" (case-insensitive)

    Returns:
        DocumentTemplate with the common sections overlaid by the
        type-specific certification and background wording
    """
    sections = dict(COMMON_SECTIONS)
    sections.update(_TYPE_SECTIONS[normalize_clearance_type(clearance_type)])
    return DocumentTemplate(sections=sections)


def section_title(template: DocumentTemplate, name: str) -> str:
    """Heading printed above a section; falls back to the upper-cased key."""
    return template.section(f"{name}_title") or name.replace("_", " ").upper()
