"""
Occupation catalog and keyword index.

Holds the fixed BLS occupation wage data used to value work instructions,
and the keyword index derived from it.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Sequence, Tuple


class OccupationCategory(Enum):
    """Occupation groupings based on BLS major groups."""
    TECHNOLOGY_ENGINEERING = "technology_engineering"
    BUSINESS_FINANCE = "business_finance"
    HEALTHCARE_SOCIAL_SERVICES = "healthcare_social_services"
    LEGAL_MEDIA_OPERATIONS = "legal_media_operations"

    @property
    def display_name(self) -> str:
        """Human-readable category name."""
        return _CATEGORY_DISPLAY_NAMES[self]


_CATEGORY_DISPLAY_NAMES = {
    OccupationCategory.TECHNOLOGY_ENGINEERING: "Technology & Engineering",
    OccupationCategory.BUSINESS_FINANCE: "Business & Finance",
    OccupationCategory.HEALTHCARE_SOCIAL_SERVICES: "Healthcare & Social Services",
    OccupationCategory.LEGAL_MEDIA_OPERATIONS: "Legal, Media & Operations",
}


@dataclass(frozen=True)
class Occupation:
    """A single occupation with its BLS median hourly wage.

    Keywords are lowercase literal phrases matched by substring containment.
    """
    name: str
    hourly_wage: float  # USD, BLS median
    category: OccupationCategory
    keywords: Tuple[str, ...]

    def __post_init__(self):
        """Validate wage and keywords."""
        if self.hourly_wage <= 0:
            raise ValueError(f"hourly_wage must be > 0 for {self.name}")
        if not self.keywords:
            raise ValueError(f"{self.name} must have at least one keyword")


_TECH = OccupationCategory.TECHNOLOGY_ENGINEERING
_BIZ = OccupationCategory.BUSINESS_FINANCE
_HEALTH = OccupationCategory.HEALTHCARE_SOCIAL_SERVICES
_LEGAL = OccupationCategory.LEGAL_MEDIA_OPERATIONS


def _occ(name: str, wage: float, category: OccupationCategory, *keywords: str) -> Occupation:
    return Occupation(name=name, hourly_wage=wage, category=category, keywords=tuple(keywords))


# Catalog order is significant: it drives keyword index order and tie-breaks.
OCCUPATIONS: Tuple[Occupation, ...] = (
    # Technology & Engineering
    _occ("Software Developers", 69.50, _TECH,
         "software", "code", "programming", "developer", "rust", "python",
         "javascript", "api", "backend", "frontend", "fullstack", "app",
         "application", "debug", "refactor", "implement", "algorithm"),
    _occ("Computer and Information Systems Managers", 90.38, _TECH,
         "it manager", "cto", "tech lead", "infrastructure", "systems",
         "devops", "cloud", "architecture", "platform", "enterprise"),
    _occ("Industrial Engineers", 51.87, _TECH,
         "industrial", "process", "optimization", "efficiency", "workflow",
         "manufacturing", "lean", "six sigma", "production"),
    _occ("Mechanical Engineers", 52.92, _TECH,
         "mechanical", "cad", "solidworks", "machinery", "thermal", "hvac",
         "automotive", "robotics"),

    # Business & Finance
    _occ("Accountants and Auditors", 44.96, _BIZ,
         "accounting", "audit", "tax", "bookkeeping", "financial statements",
         "gaap", "ledger", "reconciliation", "cpa"),
    _occ("Administrative Services Managers", 60.59, _BIZ,
         "administrative", "office manager", "facilities", "operations",
         "scheduling", "coordination"),
    _occ("Buyers and Purchasing Agents", 39.29, _BIZ,
         "procurement", "purchasing", "vendor", "supplier", "sourcing",
         "negotiation", "contracts"),
    _occ("Compliance Officers", 40.86, _BIZ,
         "compliance", "regulatory", "audit", "policy", "governance", "risk",
         "sox", "gdpr"),
    _occ("Financial Managers", 86.76, _BIZ,
         "cfo", "finance director", "treasury", "budget", "financial planning",
         "investment management"),
    _occ("Financial and Investment Analysts", 56.01, _BIZ,
         "financial analysis", "investment", "portfolio", "stock", "equity",
         "valuation", "modeling", "dcf", "market research"),
    _occ("General and Operations Managers", 64.00, _BIZ,
         "operations", "general manager", "director", "oversee", "manage",
         "strategy", "leadership", "business"),
    _occ("Market Research Analysts and Marketing Specialists", 41.58, _BIZ,
         "market research", "marketing", "campaign", "branding", "seo",
         "advertising", "analytics", "customer", "segment"),
    _occ("Personal Financial Advisors", 77.02, _BIZ,
         "financial advisor", "wealth", "retirement", "401k", "ira",
         "estate planning", "insurance"),
    _occ("Project Management Specialists", 51.97, _BIZ,
         "project manager", "pmp", "agile", "scrum", "sprint", "milestone",
         "timeline", "stakeholder", "deliverable"),
    _occ("Property, Real Estate, and Community Association Managers", 39.77, _BIZ,
         "property", "real estate", "landlord", "tenant", "lease", "hoa",
         "community"),
    _occ("Sales Managers", 77.37, _BIZ,
         "sales manager", "revenue", "quota", "pipeline", "crm",
         "account executive", "territory"),
    _occ("Marketing and Sales Managers", 79.35, _BIZ,
         "vp sales", "cmo", "growth", "go-to-market", "demand gen"),
    _occ("Financial Specialists", 48.12, _BIZ,
         "financial specialist", "credit", "loan", "underwriting"),
    _occ("Securities, Commodities, and Financial Services Sales Agents", 48.12, _BIZ,
         "broker", "securities", "commodities", "trading", "series 7"),
    _occ("Business Operations Specialists, All Other", 44.41, _BIZ,
         "business analyst", "operations specialist", "process improvement"),
    _occ("Claims Adjusters, Examiners, and Investigators", 37.87, _BIZ,
         "claims", "insurance", "adjuster", "investigator", "fraud"),
    _occ("Transportation, Storage, and Distribution Managers", 55.77, _BIZ,
         "logistics", "supply chain", "warehouse", "distribution", "shipping",
         "inventory", "fulfillment"),
    _occ("Industrial Production Managers", 62.11, _BIZ,
         "production manager", "plant manager", "manufacturing operations"),
    _occ("Lodging Managers", 37.24, _BIZ,
         "hotel", "hospitality", "lodging", "resort", "concierge"),
    _occ("Real Estate Brokers", 39.77, _BIZ,
         "real estate broker", "realtor", "mls", "listing"),
    _occ("Managers, All Other", 72.06, _BIZ,
         "manager", "supervisor", "team lead"),

    # Healthcare & Social Services
    _occ("Medical and Health Services Managers", 66.22, _HEALTH,
         "healthcare", "hospital", "clinic", "medical", "health services",
         "patient", "hipaa"),
    _occ("Social and Community Service Managers", 41.39, _HEALTH,
         "social services", "community", "nonprofit", "outreach",
         "case management", "welfare"),
    _occ("Child, Family, and School Social Workers", 41.39, _HEALTH,
         "social worker", "child welfare", "family services", "school counselor"),
    _occ("Registered Nurses", 66.22, _HEALTH,
         "nurse", "rn", "nursing", "patient care", "clinical"),
    _occ("Nurse Practitioners", 66.22, _HEALTH,
         "np", "nurse practitioner", "aprn", "prescribe"),
    _occ("Pharmacists", 66.22, _HEALTH,
         "pharmacy", "pharmacist", "medication", "prescription", "drug"),
    _occ("Medical Secretaries and Administrative Assistants", 66.22, _HEALTH,
         "medical secretary", "medical records", "ehr", "scheduling appointments"),

    # Legal, Media & Operations
    _occ("Lawyers", 44.41, _LEGAL,
         "lawyer", "attorney", "legal", "contract", "litigation", "counsel",
         "law", "paralegal"),
    _occ("Editors", 72.06, _LEGAL,
         "editor", "editing", "proofread", "copy edit", "manuscript",
         "publication"),
    _occ("Film and Video Editors", 68.15, _LEGAL,
         "video editor", "film", "premiere", "final cut", "davinci",
         "post-production"),
    _occ("Audio and Video Technicians", 41.86, _LEGAL,
         "audio", "video", "av", "broadcast", "streaming", "recording"),
    _occ("Producers and Directors", 41.86, _LEGAL,
         "producer", "director", "production", "creative director", "content",
         "show"),
    _occ("News Analysts, Reporters, and Journalists", 68.15, _LEGAL,
         "journalist", "reporter", "news", "article", "press", "interview",
         "story"),
    _occ("Entertainment and Recreation Managers, Except Gambling", 41.86, _LEGAL,
         "entertainment", "recreation", "event", "venue", "concert"),
    _occ("Recreation Workers", 41.86, _LEGAL,
         "recreation", "activity", "fitness", "sports"),
    _occ("Customer Service Representatives", 44.41, _LEGAL,
         "customer service", "support", "helpdesk", "ticket", "chat"),
    _occ("Private Detectives and Investigators", 37.87, _LEGAL,
         "detective", "investigator", "background check", "surveillance"),
    _occ("First-Line Supervisors of Police and Detectives", 72.06, _LEGAL,
         "police", "law enforcement", "security supervisor"),
)


class KeywordIndex:
    """Read-only mapping from keyword phrase to catalog positions.

    Built once from an ordered catalog. Identical catalog ordering always
    yields an identical index, including iteration order.
    """

    def __init__(self, occupations: Sequence[Occupation]):
        entries: Dict[str, List[int]] = {}
        for position, occupation in enumerate(occupations):
            for keyword in occupation.keywords:
                entries.setdefault(keyword, []).append(position)
        self._entries: Mapping[str, Tuple[int, ...]] = MappingProxyType(
            {keyword: tuple(positions) for keyword, positions in entries.items()}
        )

    def positions(self, keyword: str) -> Tuple[int, ...]:
        """Catalog positions for a keyword, empty if unknown."""
        return self._entries.get(keyword, ())

    def items(self):
        return self._entries.items()

    def __contains__(self, keyword: object) -> bool:
        return keyword in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


KEYWORD_INDEX = KeywordIndex(OCCUPATIONS)
