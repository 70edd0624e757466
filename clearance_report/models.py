"""Domain Models

Read-only inputs to the renderer: the clearance record with its items and
the document template the record is merged into.
"""
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Union

from .config import CLEARANCE_TYPES, DEFAULT_CLEARANCE_TYPE
from .exceptions import InvalidRecordError

logger = logging.getLogger(__name__)

# bytes, data URI, http(s) URL or filesystem path
AssetRef = Union[bytes, str]


def normalize_clearance_type(value: Optional[str]) -> str:
    """
    Map free-form clearance type input onto one of the canonical labels.

    Args:
        value: Clearance type as entered (e.g. "non friable", "FRIABLE")

    Returns:
        "Non-friable", "Friable" or "Mixed"; the default type when empty
    """
    if not value:
        return DEFAULT_CLEARANCE_TYPE

    key = value.strip().lower().replace(" ", "-").replace("_", "-")
    for label in CLEARANCE_TYPES:
        if label.lower() == key or label.lower().replace("-", "") == key.replace("-", ""):
            return label

    logger.warning("Unrecognized clearance type %r, using %s", value, DEFAULT_CLEARANCE_TYPE)
    return DEFAULT_CLEARANCE_TYPE


def _parse_date(value: Any) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    for fmt in ("%Y-%m-%d", "%d/%m/%Y", "%d-%m-%Y"):
        try:
            return datetime.strptime(text[:10], fmt).date()
        except ValueError:
            continue
    raise InvalidRecordError(f"Unrecognized clearance date: {value!r}")


def _pick(data: Dict, *keys, default=None):
    """Return the first non-empty value among several spellings of a key."""
    for key in keys:
        value = data.get(key)
        if value not in (None, ""):
            return value
    return default


def _parse_flag(value: Any) -> bool:
    """JSON booleans, or their string spellings ("true", "no", "1", ...)."""
    if isinstance(value, str):
        text = value.strip().lower()
        if text in ("true", "yes", "y", "1"):
            return True
        if text in ("false", "no", "n", "0", ""):
            return False
        raise InvalidRecordError(f"Unrecognized flag value: {value!r}")
    return bool(value)


@dataclass(frozen=True)
class ClearanceItem:
    """One removed asbestos-containing material listed on the certificate.

    Attributes:
        location: Where the material was removed from
        material: Material description
        asbestos_type: "non-friable" or "friable"
        photograph: Optional photograph reference (bytes, data URI, URL or path)
        notes: Optional free-text notes
    """

    location: str
    material: str
    asbestos_type: str = "non-friable"
    photograph: Optional[AssetRef] = None
    notes: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict) -> "ClearanceItem":
        return cls(
            location=_pick(data, "location", "locationDescription", default=""),
            material=_pick(data, "material", "materialDescription", default=""),
            asbestos_type=_pick(data, "asbestos_type", "asbestosType", default="non-friable"),
            photograph=_pick(data, "photograph", "photo"),
            notes=_pick(data, "notes"),
        )


@dataclass(frozen=True)
class ClearanceRecord:
    """The clearance inspection being reported on.

    Every field except ``items`` may be missing; the input adapter fills
    gaps with fallback text so that an incomplete record still renders.
    """

    project_id: Optional[str] = None
    site_name: Optional[str] = None
    client_name: Optional[str] = None
    clearance_date: Optional[date] = None
    clearance_type: str = DEFAULT_CLEARANCE_TYPE
    assessor_name: Optional[str] = None
    assessor_licence: Optional[str] = None
    removalist_name: Optional[str] = None
    inspection_time: Optional[str] = None
    air_monitoring: bool = False
    notes: Optional[str] = None
    items: List[ClearanceItem] = field(default_factory=list)

    def __post_init__(self):
        # frozen dataclass: go through object.__setattr__ for normalisation
        object.__setattr__(self, "clearance_type", normalize_clearance_type(self.clearance_type))
        object.__setattr__(self, "items", list(self.items))

    @classmethod
    def from_dict(cls, data: Dict) -> "ClearanceRecord":
        """
        Build a record from a JSON-shaped dictionary.

        Both snake_case keys and the camelCase keys of the job-management
        system are accepted. A nested ``project`` object may carry the
        project ID, site name and client.

        Args:
            data: Parsed JSON object

        Returns:
            ClearanceRecord

        Raises:
            InvalidRecordError: If ``data`` is not a mapping or a field is malformed
        """
        if not isinstance(data, dict):
            raise InvalidRecordError(f"Record must be an object, got {type(data).__name__}")

        project = data.get("project") or data.get("projectId") or {}
        if not isinstance(project, dict):
            project = {"projectID": project}
        client = project.get("client") or {}
        if not isinstance(client, dict):
            # Unpopulated references arrive as a bare ID
            client = {}

        raw_items = data.get("items") or []
        if not isinstance(raw_items, list):
            raise InvalidRecordError("Record 'items' must be a list")

        return cls(
            project_id=_pick(data, "project_id") or _pick(project, "projectID", "project_id"),
            site_name=_pick(data, "site_name", "siteName") or _pick(project, "name"),
            client_name=_pick(data, "client_name", "clientName") or _pick(client, "name"),
            clearance_date=_parse_date(_pick(data, "clearance_date", "clearanceDate")),
            clearance_type=_pick(data, "clearance_type", "clearanceType", default=DEFAULT_CLEARANCE_TYPE),
            assessor_name=_pick(data, "assessor_name", "LAA", "laaName"),
            assessor_licence=_pick(data, "assessor_licence", "laaLicence"),
            removalist_name=_pick(data, "removalist_name", "asbestosRemovalist"),
            inspection_time=_pick(data, "inspection_time", "inspectionTime"),
            air_monitoring=_parse_flag(_pick(data, "air_monitoring", "airMonitoring", default=False)),
            notes=_pick(data, "notes"),
            items=[ClearanceItem.from_dict(item) for item in raw_items],
        )


@dataclass(frozen=True)
class CompanyDetails:
    """Company details block printed in the header band and on fixed pages."""

    name: str = "Lancaster & Dickenson Consulting Pty Ltd"
    address_lines: List[str] = field(default_factory=lambda: ["4/6 Dacre Street", "Mitchell ACT 2911"])
    phone: str = "(02) 6241 2779"
    email: str = "enquiries@landd.com.au"
    website: str = "www.landd.com.au"
    abn: str = "74 169 785 915"
    logo: Optional[AssetRef] = None

    def header_lines(self) -> List[str]:
        """Lines of the right-aligned address block in the header band."""
        lines = list(self.address_lines)
        contact = " | ".join(part for part in (self.phone, self.email) if part)
        if contact:
            lines.append(contact)
        if self.website:
            lines.append(self.website)
        return lines


@dataclass(frozen=True)
class DocumentTemplate:
    """Template text merged with a record to produce the document plan.

    Attributes:
        company: Company details block
        cover_title: Title printed on the cover page
        cover_subtitle: Subtitle printed on the cover page
        sections: Named section texts; may contain ``{TOKEN}`` placeholders,
            blank-line paragraph breaks and bullet lines
        footer_text: Footer caption template (e.g. "{REPORT_TYPE} Clearance
            Certificate: {SITE_NAME}")
        background: Optional cover background artwork reference
    """

    company: CompanyDetails = field(default_factory=CompanyDetails)
    cover_title: str = "ASBESTOS REMOVAL CLEARANCE CERTIFICATE"
    cover_subtitle: str = "Clearance Inspection Report"
    sections: Dict[str, str] = field(default_factory=dict)
    footer_text: str = "{REPORT_TYPE} Clearance Certificate: {SITE_NAME}"
    background: Optional[AssetRef] = None

    def section(self, name: str) -> str:
        return self.sections.get(name, "")

    @classmethod
    def from_dict(cls, data: Dict, base: Optional["DocumentTemplate"] = None) -> "DocumentTemplate":
        """
        Build a template from a JSON-shaped dictionary, overlaying ``base``.

        Args:
            data: Parsed JSON object; keys missing here keep the base value
            base: Template supplying defaults (a blank template when None)

        Returns:
            DocumentTemplate
        """
        base = base or cls()
        company_data = data.get("company") or data.get("companyDetails") or {}
        address = company_data.get("address_lines") or company_data.get("address")
        if isinstance(address, str):
            address = [part.strip() for part in address.split(",") if part.strip()]

        company = CompanyDetails(
            name=company_data.get("name", base.company.name),
            address_lines=address or list(base.company.address_lines),
            phone=company_data.get("phone", base.company.phone),
            email=company_data.get("email", base.company.email),
            website=company_data.get("website", base.company.website),
            abn=company_data.get("abn", base.company.abn),
            logo=company_data.get("logo", base.company.logo),
        )
        sections = dict(base.sections)
        sections.update(data.get("sections") or data.get("standardSections") or {})

        return cls(
            company=company,
            cover_title=data.get("cover_title", base.cover_title),
            cover_subtitle=data.get("cover_subtitle", base.cover_subtitle),
            sections=sections,
            footer_text=data.get("footer_text", base.footer_text),
            background=data.get("background", base.background),
        )
