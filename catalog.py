import logging
from typing import Iterable, List, Optional, Sequence, Union

from models import CategoryEnum, LevelEnum, University

logger = logging.getLogger(__name__)

# Country normalization mapping
COUNTRY_MAPPING = {
    "USA": "United States",
    "US": "United States",
    "United States": "United States",
    "UK": "United Kingdom",
    "United Kingdom": "United Kingdom",
    "Great Britain": "United Kingdom",
    "Canada": "Canada",
    "Australia": "Australia",
    "Germany": "Germany",
    "Netherlands": "Netherlands",
    "Ireland": "Ireland",
}

def normalize_country(country: str) -> str:
    """Normalize country input so aliases compare equal."""
    if not country:
        return ""

    # Try exact match first
    normalized = COUNTRY_MAPPING.get(country.strip())
    if normalized:
        return normalized

    # Try case-insensitive match
    for key, value in COUNTRY_MAPPING.items():
        if key.lower() == country.strip().lower():
            return value

    # Return original if no mapping found
    return country.strip()

CATALOG: List[University] = [
    University(
        id="uni-mit", name="Massachusetts Institute of Technology", country="USA", city="Cambridge",
        ranking=1, tuition_fee=57000, living_cost=22000,
        programs=["Computer Science", "Electrical Engineering", "Data Science", "Mechanical Engineering"],
        acceptance_rate=4.0, min_gpa=3.9, requires_gre=True, requires_ielts=True,
        category=CategoryEnum.DREAM, risk_level=LevelEnum.HIGH, cost_level=LevelEnum.HIGH,
        acceptance_chance=LevelEnum.LOW,
        why_fit="World-leading research labs and a deep industry network in technology.",
        risks=["Extremely competitive admissions", "Very high cost of attendance"],
    ),
    University(
        id="uni-stanford", name="Stanford University", country="USA", city="Stanford",
        ranking=3, tuition_fee=58000, living_cost=25000,
        programs=["Computer Science", "Business Administration", "Data Science", "Bioengineering"],
        acceptance_rate=4.3, min_gpa=3.9, requires_gre=True, requires_ielts=True,
        category=CategoryEnum.DREAM, risk_level=LevelEnum.HIGH, cost_level=LevelEnum.HIGH,
        acceptance_chance=LevelEnum.LOW,
        why_fit="Silicon Valley location with strong entrepreneurship and AI programs.",
        risks=["Extremely competitive admissions", "High living costs in the Bay Area"],
    ),
    University(
        id="uni-cmu", name="Carnegie Mellon University", country="USA", city="Pittsburgh",
        ranking=24, tuition_fee=52000, living_cost=16000,
        programs=["Computer Science", "Software Engineering", "Robotics", "Information Systems"],
        acceptance_rate=11.0, min_gpa=3.6, requires_gre=True, requires_ielts=True,
        category=CategoryEnum.DREAM, risk_level=LevelEnum.HIGH, cost_level=LevelEnum.HIGH,
        acceptance_chance=LevelEnum.MEDIUM,
        why_fit="Top-ranked computer science school with industry-focused professional masters.",
        risks=["Highly competitive CS programs", "Tuition above average"],
    ),
    University(
        id="uni-asu", name="Arizona State University", country="USA", city="Tempe",
        ranking=179, tuition_fee=32000, living_cost=14000,
        programs=["Computer Science", "Business Analytics", "Civil Engineering", "Data Science"],
        acceptance_rate=88.0, min_gpa=3.0, requires_gre=False, requires_ielts=True,
        category=CategoryEnum.SAFE, risk_level=LevelEnum.LOW, cost_level=LevelEnum.MEDIUM,
        acceptance_chance=LevelEnum.HIGH,
        why_fit="Large international community and flexible admission requirements.",
        risks=["Large class sizes"],
    ),
    University(
        id="uni-northeastern", name="Northeastern University", country="USA", city="Boston",
        ranking=53, tuition_fee=45000, living_cost=20000,
        programs=["Computer Science", "Information Systems", "Data Analytics", "Engineering Management"],
        acceptance_rate=18.0, min_gpa=3.3, requires_gre=False, requires_ielts=True,
        category=CategoryEnum.TARGET, risk_level=LevelEnum.MEDIUM, cost_level=LevelEnum.HIGH,
        acceptance_chance=LevelEnum.MEDIUM,
        why_fit="Co-op programme provides paid work experience during your degree.",
        risks=["High cost of living in Boston"],
    ),
    University(
        id="uni-oxford", name="University of Oxford", country="UK", city="Oxford",
        ranking=2, tuition_fee=39000, living_cost=16000,
        programs=["Computer Science", "Economics", "Law", "Mathematics"],
        acceptance_rate=14.0, min_gpa=3.8, requires_gre=False, requires_ielts=True,
        category=CategoryEnum.DREAM, risk_level=LevelEnum.HIGH, cost_level=LevelEnum.HIGH,
        acceptance_chance=LevelEnum.LOW,
        why_fit="Tutorial-based teaching and global academic prestige.",
        risks=["Very selective admissions", "Short one-year masters leave little time for internships"],
    ),
    University(
        id="uni-edinburgh", name="University of Edinburgh", country="UK", city="Edinburgh",
        ranking=22, tuition_fee=34000, living_cost=13000,
        programs=["Artificial Intelligence", "Computer Science", "Data Science", "Business Administration"],
        acceptance_rate=40.0, min_gpa=3.3, requires_gre=False, requires_ielts=True,
        category=CategoryEnum.TARGET, risk_level=LevelEnum.MEDIUM, cost_level=LevelEnum.MEDIUM,
        acceptance_chance=LevelEnum.MEDIUM,
        why_fit="Pioneering informatics school with strong AI research.",
        risks=["Competitive intake for AI programmes"],
    ),
    University(
        id="uni-manchester", name="University of Manchester", country="UK", city="Manchester",
        ranking=32, tuition_fee=30000, living_cost=12000,
        programs=["Computer Science", "Mechanical Engineering", "Finance", "Data Science"],
        acceptance_rate=56.0, min_gpa=3.0, requires_gre=False, requires_ielts=True,
        category=CategoryEnum.SAFE, risk_level=LevelEnum.LOW, cost_level=LevelEnum.MEDIUM,
        acceptance_chance=LevelEnum.HIGH,
        why_fit="Affordable UK city with a broad range of taught masters programmes.",
        risks=["Limited scholarship availability for international students"],
    ),
    University(
        id="uni-toronto", name="University of Toronto", country="Canada", city="Toronto",
        ranking=21, tuition_fee=45000, living_cost=17000,
        programs=["Computer Science", "Engineering", "Business Administration", "Public Health"],
        acceptance_rate=43.0, min_gpa=3.5, requires_gre=False, requires_ielts=True,
        category=CategoryEnum.TARGET, risk_level=LevelEnum.MEDIUM, cost_level=LevelEnum.HIGH,
        acceptance_chance=LevelEnum.MEDIUM,
        why_fit="Canada's top research university with post-graduation work permit options.",
        risks=["Rising tuition for international students"],
    ),
    University(
        id="uni-ubc", name="University of British Columbia", country="Canada", city="Vancouver",
        ranking=34, tuition_fee=38000, living_cost=18000,
        programs=["Computer Science", "Data Science", "Forestry", "Electrical Engineering"],
        acceptance_rate=52.0, min_gpa=3.3, requires_gre=False, requires_ielts=True,
        category=CategoryEnum.TARGET, risk_level=LevelEnum.MEDIUM, cost_level=LevelEnum.MEDIUM,
        acceptance_chance=LevelEnum.MEDIUM,
        why_fit="Strong research output and a welcoming, diverse campus.",
        risks=["Vancouver housing is expensive"],
    ),
    University(
        id="uni-waterloo", name="University of Waterloo", country="Canada", city="Waterloo",
        ranking=112, tuition_fee=30000, living_cost=12000,
        programs=["Computer Science", "Software Engineering", "Mathematics", "Systems Design Engineering"],
        acceptance_rate=53.0, min_gpa=3.2, requires_gre=False, requires_ielts=True,
        category=CategoryEnum.SAFE, risk_level=LevelEnum.LOW, cost_level=LevelEnum.MEDIUM,
        acceptance_chance=LevelEnum.HIGH,
        why_fit="Renowned co-op system and strong ties to the tech industry.",
        risks=["Smaller city with fewer off-campus activities"],
    ),
    University(
        id="uni-tum", name="Technical University of Munich", country="Germany", city="Munich",
        ranking=37, tuition_fee=4000, living_cost=14000,
        programs=["Computer Science", "Mechanical Engineering", "Electrical Engineering", "Management"],
        acceptance_rate=8.0, min_gpa=3.5, requires_gre=False, requires_ielts=True,
        category=CategoryEnum.DREAM, risk_level=LevelEnum.HIGH, cost_level=LevelEnum.LOW,
        acceptance_chance=LevelEnum.LOW,
        why_fit="World-class engineering with minimal tuition fees.",
        risks=["Highly selective for international applicants", "Some programmes require German"],
    ),
    University(
        id="uni-rwth", name="RWTH Aachen University", country="Germany", city="Aachen",
        ranking=106, tuition_fee=1000, living_cost=11000,
        programs=["Computer Science", "Mechanical Engineering", "Automation Engineering", "Data Science"],
        acceptance_rate=25.0, min_gpa=3.2, requires_gre=False, requires_ielts=True,
        category=CategoryEnum.TARGET, risk_level=LevelEnum.MEDIUM, cost_level=LevelEnum.LOW,
        acceptance_chance=LevelEnum.MEDIUM,
        why_fit="Excellent engineering reputation at a very low cost.",
        risks=["Long visa processing times"],
    ),
    University(
        id="uni-melbourne", name="University of Melbourne", country="Australia", city="Melbourne",
        ranking=14, tuition_fee=42000, living_cost=19000,
        programs=["Computer Science", "Information Technology", "Business Administration", "Medicine"],
        acceptance_rate=70.0, min_gpa=3.2, requires_gre=False, requires_ielts=True,
        category=CategoryEnum.TARGET, risk_level=LevelEnum.MEDIUM, cost_level=LevelEnum.HIGH,
        acceptance_chance=LevelEnum.MEDIUM,
        why_fit="Top Australian university with generous post-study work rights.",
        risks=["High overall cost of attendance"],
    ),
    University(
        id="uni-monash", name="Monash University", country="Australia", city="Melbourne",
        ranking=42, tuition_fee=36000, living_cost=18000,
        programs=["Information Technology", "Data Science", "Engineering", "Pharmacy"],
        acceptance_rate=75.0, min_gpa=3.0, requires_gre=False, requires_ielts=True,
        category=CategoryEnum.SAFE, risk_level=LevelEnum.LOW, cost_level=LevelEnum.MEDIUM,
        acceptance_chance=LevelEnum.HIGH,
        why_fit="Industry-linked programmes and a large international student body.",
        risks=["Campus is outside the city centre"],
    ),
]

logger.info(f"[CATALOG] Loaded {len(CATALOG)} universities")

def get_university(university_id: str, catalog: Sequence[University] = CATALOG) -> Optional[University]:
    """Look up a catalog entry by id."""
    for uni in catalog:
        if uni.id == university_id:
            return uni
    return None

def offers_program(university: University, field_of_study: str) -> bool:
    """True if any program name contains the field, case-insensitively."""
    needle = (field_of_study or "").lower()
    return any(needle in program.lower() for program in university.programs)

def query_universities(
    countries: Union[str, Iterable[str], None] = None,
    field_of_study: Optional[str] = None,
    limit: Optional[int] = None,
    catalog: Sequence[University] = CATALOG,
) -> List[University]:
    """
    Filter the catalog, preserving catalog order.

    Args:
        countries: Preferred countries; empty or None means any country
        field_of_study: Matched against program names; None skips the filter
        limit: Maximum results to return

    Returns:
        List of matching universities
    """
    if isinstance(countries, str):
        countries = [countries]
    wanted = {normalize_country(c) for c in (countries or []) if normalize_country(c)}

    results = []
    for uni in catalog:
        if wanted and normalize_country(uni.country) not in wanted:
            continue
        if field_of_study is not None and not offers_program(uni, field_of_study):
            continue
        results.append(uni)
        if limit is not None and len(results) >= limit:
            break

    logger.debug(f"[CATALOG] Query countries={sorted(wanted)} field={field_of_study!r} found={len(results)}")
    return results