"""
Well-known social service URL patterns.

Two views of the same table are exposed. The find view maps a service to
one or more regular expressions whose first capture group is the profile
handle. The template view maps a service to a profile URL with a
``%handle%`` placeholder. Other components rely on the exact service keys.
"""
import re
from typing import Dict, Iterable, List, Optional, Union

HANDLE_PLACEHOLDER = '%handle%'

SOCIAL_PROFILE_URL_PATTERNS: Dict[str, Union[str, List[str]]] = {
    'twitter': r'twitter.com/(.*?)($|/)',
    'facebook': [
        r'facebook.com/(.*?)($|/)',
        r'fb.me/(.*?)($|/)',
    ],
    'linkedin': r'linkedin.com/in/(.*?)($|/)',
    'instagram': r'instagram.com/(.*?)($|/)',
    'pinterest': r'pinterest.com/(.*?)($|/)',
    'klout': r'klout.com/(.*?)($|/)',
    'youtube': [
        r'youtube.com/user/(.*?)($|/)',
        r'youtu.be/user/(.*?)($|/)',
    ],
    'flickr': r'flickr.com/photos/(.*?)($|/)',
    'skype': r'skype:(.*?)($|\?)',
    'google': r'plus.google.com/(.*?)($|/)',
}

SOCIAL_PROFILE_URL_TEMPLATES: Dict[str, str] = {
    'twitter': 'https://twitter.com/%handle%',
    'facebook': 'https://facebook.com/%handle%',
    'linkedin': 'https://linkedin.com/in/%handle%',
    'instagram': 'https://instagram.com/%handle%',
    'pinterest': 'https://pinterest.com/%handle%',
    'klout': 'https://klout.com/%handle%',
    'youtube': 'https://youtube.com/user/%handle%',
    'flickr': 'https://flickr.com/photos/%handle%',
    'skype': 'skype:%handle%?call',
    'googleplus': 'https://plus.google.com/%handle%',
}


def get_social_profile_url_regex(find: bool = True) -> Dict[str, Union[str, List[str]]]:
    """
    Get the social service table.

    Args:
        find: If True, return the regexes used to find a handle in a URL;
            otherwise return URL templates with a ``%handle%`` placeholder

    Returns:
        A copy of the requested table
    """
    if find:
        return {
            service: list(patterns) if isinstance(patterns, list) else patterns
            for service, patterns in SOCIAL_PROFILE_URL_PATTERNS.items()
        }
    return dict(SOCIAL_PROFILE_URL_TEMPLATES)


def _compiled_patterns() -> Dict[str, List[re.Pattern]]:
    compiled = {}
    for service, patterns in SOCIAL_PROFILE_URL_PATTERNS.items():
        if isinstance(patterns, str):
            patterns = [patterns]
        compiled[service] = [re.compile(pattern) for pattern in patterns]
    return compiled


_COMPILED_PATTERNS = _compiled_patterns()


def find_profile_handle(url: str) -> Optional[tuple]:
    """
    Find the service and handle a URL points to.

    Returns:
        ``(service, handle)`` for the first matching service, or None
    """
    for service, patterns in _COMPILED_PATTERNS.items():
        for pattern in patterns:
            match = pattern.search(url)
            if match and match.group(1):
                return service, match.group(1)
    return None


def extract_profile_handles(urls: Iterable[str]) -> Dict[str, str]:
    """
    Extract one handle per service from a collection of URLs.

    The first URL found for a service wins.
    """
    handles: Dict[str, str] = {}
    for url in urls:
        if not url:
            continue
        found = find_profile_handle(url)
        if found and found[0] not in handles:
            handles[found[0]] = found[1]
    return handles


def build_profile_url(service: str, handle: str) -> Optional[str]:
    """Build the profile URL for a handle, or None for an unknown service."""
    template = SOCIAL_PROFILE_URL_TEMPLATES.get(service)
    if template is None:
        return None
    return template.replace(HANDLE_PLACEHOLDER, handle)
