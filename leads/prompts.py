"""
Prompt construction.

Each keyword fans out into a fixed set of search-query variations; each
variation is then wrapped in the batch prompt that asks the model to
search and answer with a bare JSON array of profiles.
"""

from leads.config import BATCH_SIZE
from leads.models import SearchFilters

PROFILE_FIELDS = (
    "name", "username", "bio", "followers",
    "profile_pic", "instagram_url", "whatsapp",
)


def _bio_suffix(filters: SearchFilters | None) -> str:
    if filters and filters.bio_keyword:
        return f' "{filters.bio_keyword}"'
    return ""


def build_variations(keyword: str, filters: SearchFilters | None = None) -> list[str]:
    """Return the search queries fired for one keyword, in order."""
    keyword = keyword.strip()
    suffix  = _bio_suffix(filters)
    return [
        # plain niche search
        f'site:instagram.com "{keyword}"{suffix} brasil',
        # commercial intent
        f'"{keyword}" instagram brasil orçamentos contato{suffix}',
        # authority / specialist
        f'"{keyword}" especialista profissional instagram brasil{suffix}',
    ]


def build_filter_instruction(filters: SearchFilters | None) -> str:
    if filters is None:
        return ""

    lines = []
    if filters.min_followers or filters.max_followers:
        lines.append(
            "FOLLOWER REQUIREMENT: User wants follower count between "
            f"{filters.min_followers or '0'} and {filters.max_followers or 'any'}.\n"
            "Prioritize results indicating followers within this range."
        )
    if filters.bio_keyword:
        lines.append(
            "BIO KEYWORD FILTER:\n"
            f'- The user specifically wants profiles containing: "{filters.bio_keyword}".\n'
            "- Prioritize these profiles heavily."
        )
    return "\n".join(lines)


def build_batch_prompt(
    query: str,
    filters: SearchFilters | None = None,
    batch_size: int = BATCH_SIZE,
) -> str:
    """Full instruction for one batch: search, extract, answer in raw JSON."""
    return (
        f"Perform a Google Search to find {batch_size} REAL, ACTIVE, and PUBLIC "
        f'Instagram profiles related to: "{query}".\n\n'
        "GEOLOCATION: BRAZIL ONLY. (Look for Portuguese bios, +55 numbers, BR cities).\n"
        "NICHE: Return PROFESSIONAL profiles (service providers, businesses), NOT random people.\n"
        f"{build_filter_instruction(filters)}\n\n"
        "Extract details into a JSON object:\n"
        "- name: Display name.\n"
        "- username: Handle without @.\n"
        "- bio: Short summary in Portuguese.\n"
        '- followers: Extract exact number (e.g. "10k") or ESTIMATE based on context.\n'
        "- profile_pic: URL if found, else null.\n"
        "- instagram_url: Full URL.\n"
        "- whatsapp: Search snippet/bio for +55 numbers. Format as "
        '"https://wa.me/55[DDD][NUMBER]". If none, return null.\n\n'
        "OUTPUT FORMAT:\n"
        "Return ONLY a raw JSON array. No markdown code blocks. No explanations.\n"
        'Example: [{"name": "...", "username": "...", "instagram_url": "..."}]'
    )
