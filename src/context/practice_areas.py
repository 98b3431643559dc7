"""
Practice Area Detection

Detects a law firm's main practice area and suggests target keywords from:
- Google Places types (e.g. "personal_injury_attorney")
- Firm name, page title and headings
- Scraped page markdown (Firecrawl)
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)


# =============================================================================
# PRACTICE PROFILES
# =============================================================================

@dataclass(frozen=True)
class PracticeProfile:
    """Signals and canonical keywords for one practice area."""
    id: str
    label: str
    type_signals: Tuple[str, ...]
    text_signals: Tuple[str, ...]
    keywords: Tuple[str, ...]


PRACTICE_PROFILES: Tuple[PracticeProfile, ...] = (
    PracticeProfile(
        id="personal_injury",
        label="Personal Injury",
        type_signals=(
            "personal_injury", "car_accident", "motorcycle", "truck",
            "injury_law", "trial_attorney",
        ),
        text_signals=(
            "personal injury", "car accident", "auto accident", "truck accident",
            "motorcycle accident", "wrongful death", "slip and fall",
            "premises liability", "catastrophic injury", "dog bite",
            "product liability", "medical malpractice",
        ),
        keywords=(
            "Personal Injury Lawyer", "Car Accident Lawyer", "Truck Accident Lawyer",
            "Wrongful Death Lawyer", "Catastrophic Injury Lawyer",
            "Premises Liability Lawyer", "Product Liability Lawyer",
            "Medical Malpractice Lawyer", "Slip and Fall Lawyer", "Dog Bite Lawyer",
        ),
    ),
    PracticeProfile(
        id="criminal_defense",
        label="Criminal Defense",
        type_signals=("criminal_defense", "dui_lawyer", "criminal_justice"),
        text_signals=(
            "criminal defense", "dui", "dwi", "drunk driving", "felony",
            "misdemeanor", "domestic violence", "drug crime", "theft offense",
            "burglary",
        ),
        keywords=(
            "Criminal Defense Lawyer", "DUI Defense Attorney", "Felony Defense Lawyer",
            "Misdemeanor Defense Lawyer", "Drug Crime Lawyer",
            "Domestic Violence Defense Attorney", "Theft Defense Attorney",
            "Assault Defense Attorney", "Driving Under the Influence Lawyer",
            "Traffic Violation Defense Attorney",
        ),
    ),
    PracticeProfile(
        id="immigration",
        label="Immigration",
        type_signals=("immigration",),
        text_signals=(
            "immigration", "green card", "visa", "citizenship", "deportation", "asylum",
        ),
        keywords=(
            "Immigration Attorney", "Green Card Lawyer", "Visa Lawyer",
            "Citizenship Attorney", "Deportation Defense Lawyer", "Asylum Lawyer",
        ),
    ),
    PracticeProfile(
        id="family_law",
        label="Family Law",
        type_signals=("family_law",),
        text_signals=(
            "family law", "divorce", "child custody", "spousal support", "alimony",
            "child support", "adoption",
        ),
        keywords=(
            "Family Law Attorney", "Divorce Lawyer", "Child Custody Lawyer",
            "Child Support Attorney", "Spousal Support Lawyer",
            "Domestic Violence Restraining Order Attorney",
        ),
    ),
    PracticeProfile(
        id="estate_planning",
        label="Estate Planning",
        type_signals=("estate_planning", "probate"),
        text_signals=(
            "estate planning", "wills and trusts", "trusts", "probate",
            "special needs trust", "living will", "trust administration",
        ),
        keywords=(
            "Estate Planning Lawyer", "Wills and Trusts Attorney", "Probate Lawyer",
            "Trust Administration Attorney", "Special Needs Trusts Attorney",
            "Living Wills Lawyer",
        ),
    ),
    PracticeProfile(
        id="bankruptcy",
        label="Bankruptcy",
        type_signals=("bankruptcy",),
        text_signals=("bankruptcy", "chapter 7", "chapter 13", "debt relief"),
        keywords=(
            "Bankruptcy Lawyer", "Chapter 7 Bankruptcy Attorney",
            "Chapter 13 Bankruptcy Attorney", "Debt Relief Lawyer",
        ),
    ),
    PracticeProfile(
        id="employment",
        label="Employment Law",
        type_signals=("employment_law",),
        text_signals=(
            "wrongful termination", "workplace discrimination", "harassment",
            "wage and hour", "overtime pay",
        ),
        keywords=(
            "Employment Law Attorney", "Wrongful Termination Lawyer",
            "Workplace Discrimination Lawyer", "Harassment Attorney",
            "Wage and Hour Lawyer",
        ),
    ),
    PracticeProfile(
        id="business",
        label="Business Law",
        type_signals=("business_law",),
        text_signals=(
            "business litigation", "corporate law", "contract dispute",
            "partnership dispute",
        ),
        keywords=(
            "Business Litigation Attorney", "Business Law Lawyer",
            "Contract Dispute Lawyer", "Corporate Attorney",
        ),
    ),
    PracticeProfile(
        id="general",
        label="General Practice",
        type_signals=("lawyer", "law_office", "law_firm", "legal_services"),
        text_signals=("law office", "attorneys at law", "general practice"),
        keywords=(
            "Law Firm Near Me", "Local Lawyers", "General Practice Attorney",
            "Civil Litigation Lawyer",
        ),
    ),
)

GENERAL_PROFILE = next(p for p in PRACTICE_PROFILES if p.id == "general")

# Minimum signal score before a specific practice beats General Practice
MIN_PRACTICE_SCORE = 3


def detect_practice_area(
    google_types: Optional[Sequence[str]] = None,
    text: str = "",
) -> PracticeProfile:
    """
    Pick the best-matching practice profile.

    Scoring: +6 per type signal found in a Google type, +3 per text signal
    in the text, +4 when a Google type contains the profile id itself.
    Ties keep the earlier profile. Below MIN_PRACTICE_SCORE falls back to
    General Practice.
    """
    types_lower = [t.lower() for t in (google_types or [])]
    full_text = (text or "").lower()

    best_profile: Optional[PracticeProfile] = None
    best_score = 0

    for profile in PRACTICE_PROFILES:
        score = 0
        for signal in profile.type_signals:
            if any(signal in t for t in types_lower):
                score += 6
        for signal in profile.text_signals:
            if signal in full_text:
                score += 3
        if profile.id != "general" and any(profile.id in t for t in types_lower):
            score += 4

        if score > best_score:
            best_score = score
            best_profile = profile

    if best_profile is None or best_score < MIN_PRACTICE_SCORE:
        return GENERAL_PROFILE

    logger.debug(f"Detected practice {best_profile.label} (score {best_score})")
    return best_profile


def extract_heading_keywords(headings: Optional[Sequence[str]]) -> List[str]:
    """Headings mentioning lawyer/attorney, 8-80 characters, deduplicated."""
    keywords: List[str] = []
    for heading in headings or []:
        lower = heading.lower()
        if "lawyer" not in lower and "attorney" not in lower:
            continue
        cleaned = re.sub(r"\s+", " ", heading).strip()
        if 8 <= len(cleaned) <= 80 and cleaned not in keywords:
            keywords.append(cleaned)
    return keywords


def suggest_keywords(
    profile: PracticeProfile,
    headings: Optional[Sequence[str]] = None,
    city: Optional[str] = None,
    limit: int = 10,
) -> List[str]:
    """
    Canonical practice keywords, then site heading keywords, then one or
    two generic fallbacks when fewer than 5 were found.
    """
    suggestions: List[str] = []

    def add(keyword: str):
        if keyword not in suggestions:
            suggestions.append(keyword)

    for keyword in profile.keywords:
        add(keyword)
    for keyword in extract_heading_keywords(headings):
        add(keyword)

    if len(suggestions) < 5:
        add(f"{profile.label} Lawyer")
        if city:
            add(f"{city} {profile.label} Lawyer")

    return suggestions[:limit]


# =============================================================================
# MARKDOWN-BASED DETECTION (Firecrawl content)
# =============================================================================

DEFAULT_PRACTICE = "Personal Injury"

FALLBACK_KEYWORDS: Dict[str, List[str]] = {
    "Personal Injury": [
        "personal injury lawyer", "car accident lawyer", "truck accident attorney",
        "wrongful death attorney", "catastrophic injury lawyer", "slip and fall lawyer",
        "dog bite attorney", "brain injury attorney", "pedestrian accident lawyer",
        "motorcycle accident lawyer",
    ],
    "Real Estate Law": [
        "real estate lawyer", "real estate attorney", "property lawyer",
        "commercial real estate attorney", "residential real estate lawyer",
        "landlord tenant lawyer", "real estate litigation attorney",
        "property dispute lawyer", "foreclosure defense lawyer",
        "real estate contract attorney",
    ],
    "Family Law": [
        "family law attorney", "divorce lawyer", "child custody attorney",
        "child support lawyer", "spousal support attorney", "alimony lawyer",
        "adoption lawyer", "paternity attorney", "domestic violence lawyer",
        "prenuptial agreement lawyer",
    ],
    "Estate Planning": [
        "estate planning lawyer", "wills and trusts lawyer", "probate attorney",
        "trust attorney", "estate attorney", "asset protection lawyer",
        "living trust attorney", "probate lawyer", "elder law attorney",
        "guardianship lawyer",
    ],
    "Criminal Defense": [
        "criminal defense lawyer", "DUI lawyer", "felony defense lawyer",
        "drug crime attorney", "domestic violence defense lawyer",
        "assault defense attorney", "expungement lawyer", "misdemeanor lawyer",
        "sex crime defense attorney", "theft defense lawyer",
    ],
    "Business Law": [
        "business lawyer", "business attorney", "corporate lawyer",
        "business litigation attorney", "contract lawyer",
        "commercial litigation lawyer", "partnership dispute attorney",
        "business contract lawyer", "corporate attorney", "employment lawyer",
    ],
    "Immigration": [
        "immigration lawyer", "visa lawyer", "green card attorney",
        "citizenship lawyer", "deportation defense attorney", "asylum lawyer",
        "work permit attorney", "naturalization lawyer",
        "family immigration lawyer", "business immigration attorney",
    ],
    "Employment Law": [
        "employment lawyer", "wrongful termination lawyer",
        "workplace discrimination attorney", "wage dispute lawyer",
        "sexual harassment attorney", "labor law attorney", "employee rights lawyer",
        "whistleblower attorney", "severance lawyer", "FMLA lawyer",
    ],
    "Bankruptcy": [
        "bankruptcy lawyer", "chapter 7 lawyer", "chapter 13 attorney",
        "debt relief lawyer", "foreclosure defense lawyer", "debt settlement attorney",
        "bankruptcy filing lawyer", "chapter 11 attorney", "debt consolidation lawyer",
        "creditor harassment lawyer",
    ],
}

# One pattern per practice; a match is worth a flat 5 points
CONTENT_PATTERNS: Dict[str, re.Pattern] = {
    "Personal Injury": re.compile(
        r"personal injury|car accident|truck accident|wrongful death|catastrophic injury"),
    "Real Estate Law": re.compile(r"real estate|property law|landlord|tenant|foreclosure"),
    "Family Law": re.compile(r"family law|divorce|custody|child support|spousal support"),
    "Estate Planning": re.compile(r"estate planning|wills|trusts|probate|elder law"),
    "Criminal Defense": re.compile(r"criminal defense|dui|dwi|drug crime|felony"),
    "Business Law": re.compile(r"business law|corporate|commercial litigation|contract"),
    "Immigration": re.compile(r"immigration|visa|green card|citizenship|deportation"),
    "Employment Law": re.compile(
        r"employment law|wrongful termination|discrimination|harassment"),
    "Bankruptcy": re.compile(r"bankruptcy|chapter 7|chapter 13|debt relief"),
}

LEGAL_TERMS: Tuple[str, ...] = (
    "accident", "injury", "personal injury", "car accident", "truck accident", "motorcycle",
    "wrongful death", "catastrophic", "brain injury", "spinal cord", "slip and fall",
    "premises liability", "product liability", "medical malpractice", "nursing home",
    "dog bite", "bicycle accident", "pedestrian", "uber", "lyft",
    "criminal", "dui", "dwi", "drug crime", "domestic violence", "assault", "battery",
    "theft", "robbery", "burglary", "felony", "misdemeanor", "expungement",
    "divorce", "custody", "child support", "spousal support", "alimony", "separation",
    "prenuptial", "adoption", "paternity", "guardianship",
    "estate planning", "wills", "trusts", "probate", "elder law", "medicaid",
    "asset protection", "power of attorney", "living will", "conservatorship",
    "immigration", "visa", "green card", "citizenship", "deportation", "asylum",
    "business", "corporate", "contract", "litigation", "employment", "wrongful termination",
    "discrimination", "harassment", "wage", "whistleblower",
    "real estate", "landlord", "tenant", "eviction", "foreclosure", "property",
    "bankruptcy", "chapter 7", "chapter 13", "debt relief", "foreclosure defense",
    "civil rights", "police brutality", "construction", "workers compensation",
    "social security", "disability", "veterans", "toxic tort", "mass tort",
    "class action", "securities", "insurance bad faith", "wildfire", "data breach",
)

_GENERIC_HEADER_RE = re.compile(r"^#+\s*(home|about|contact|blog|news|team)", re.IGNORECASE)
_MD_LINK_RE = re.compile(r"\[([^\]]+)\]\([^)]+\)")
_FIRM_SUFFIX_RE = re.compile(r"\b(law firm|law group|aplc|pc|llp|llc)\b", re.IGNORECASE)
_PROFESSION_RE = re.compile(r"\b(lawyer|attorney)\b", re.IGNORECASE)

MAX_MARKDOWN_KEYWORDS = 15


def detect_practice_from_content(markdown: str) -> str:
    """Practice label whose pattern appears in the content, first wins on ties."""
    text = markdown.lower()
    best_label, best_score = DEFAULT_PRACTICE, 0
    for label, pattern in CONTENT_PATTERNS.items():
        score = 5 if pattern.search(text) else 0
        if score > best_score:
            best_label, best_score = label, score
    return best_label


def extract_keywords_from_markdown(markdown: str) -> List[str]:
    """
    Candidate keyword phrases from scraped markdown.

    A line qualifies when it mentions a legal term, is not a generic
    navigation header, and is 10-80 characters once markdown is stripped.
    """
    keywords: List[str] = []

    for line in markdown.split("\n"):
        text = line.strip().lower()
        if len(text) < 10 or len(text) > 100:
            continue
        if _GENERIC_HEADER_RE.match(line):
            continue
        if not any(term in text for term in LEGAL_TERMS):
            continue

        clean = re.sub(r"^#+\s*", "", line)
        clean = _MD_LINK_RE.sub(r"\1", clean)
        clean = re.sub(r"[*_`]", "", clean).strip()
        if len(clean) < 10 or len(clean) > 80:
            continue

        if clean not in keywords:
            keywords.append(clean)
        if len(keywords) >= MAX_MARKDOWN_KEYWORDS:
            break

    return keywords


def normalize_keywords(raw_keywords: Sequence[str], city: str, limit: int = 10) -> List[str]:
    """
    Turn raw phrases into "<Phrase> Lawyer In <City>" style keywords.

    Firm suffixes are dropped, "lawyer" is appended when no profession word
    is present, the city is appended when missing, and the result is title
    cased word by word.
    """
    normalized = []
    for keyword in raw_keywords[:limit]:
        kw = _FIRM_SUFFIX_RE.sub("", keyword).strip()
        if not _PROFESSION_RE.search(kw):
            kw = f"{kw} lawyer"
        if city and city.lower() not in kw.lower():
            kw = f"{kw} in {city}"
        normalized.append(" ".join(w[:1].upper() + w[1:] for w in kw.lower().split(" ")))
    return normalized


def detect_practice_by_name(firm_name: str, google_types: Optional[Sequence[str]] = None) -> str:
    """Practice label guessed from the firm name and Google types."""
    name = (firm_name or "").lower()
    types = " ".join(google_types or []).lower()

    if "real estate" in name or "real_estate" in types:
        return "Real Estate Law"
    if "family" in name or "divorce" in name:
        return "Family Law"
    if "estate planning" in name or "trust" in name:
        return "Estate Planning"
    if "criminal" in name or "dui" in name:
        return "Criminal Defense"
    if "immigration" in name:
        return "Immigration"
    if "bankruptcy" in name:
        return "Bankruptcy"
    if "employment" in name:
        return "Employment Law"
    if "business" in name or "corporate" in name:
        return "Business Law"
    return DEFAULT_PRACTICE
