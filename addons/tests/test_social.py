"""
Tests for the social service URL table.
"""
from django.test import SimpleTestCase

from ..social import (
    build_profile_url,
    extract_profile_handles,
    find_profile_handle,
    get_social_profile_url_regex,
)

SERVICES = ['twitter', 'facebook', 'linkedin', 'instagram', 'pinterest', 'klout', 'youtube', 'flickr', 'skype']


class SocialProfileUrlRegexTestCase(SimpleTestCase):
    """Test cases for the two views of the service table."""

    def test_find_view_keys(self):
        patterns = get_social_profile_url_regex()

        self.assertEqual(list(patterns), SERVICES + ['google'])

    def test_template_view_keys(self):
        templates = get_social_profile_url_regex(find=False)

        self.assertEqual(list(templates), SERVICES + ['googleplus'])
        for template in templates.values():
            self.assertIn('%handle%', template)

    def test_multiple_patterns_per_service(self):
        patterns = get_social_profile_url_regex()

        self.assertEqual(len(patterns['facebook']), 2)
        self.assertEqual(len(patterns['youtube']), 2)
        self.assertIsInstance(patterns['twitter'], str)

    def test_returned_tables_are_copies(self):
        get_social_profile_url_regex()['facebook'].append('x')
        get_social_profile_url_regex(find=False)['twitter'] = 'x'

        self.assertEqual(len(get_social_profile_url_regex()['facebook']), 2)
        self.assertEqual(get_social_profile_url_regex(find=False)['twitter'], 'https://twitter.com/%handle%')


class ProfileHandleTestCase(SimpleTestCase):
    """Test cases for finding handles in URLs."""

    def test_find_handle(self):
        self.assertEqual(find_profile_handle('https://twitter.com/mautic'), ('twitter', 'mautic'))
        self.assertEqual(find_profile_handle('https://fb.me/ann/'), ('facebook', 'ann'))
        self.assertEqual(find_profile_handle('skype:ann.smith?call'), ('skype', 'ann.smith'))

    def test_unknown_url(self):
        self.assertIsNone(find_profile_handle('https://example.com/ann'))

    def test_extract_first_handle_per_service(self):
        urls = [
            'https://twitter.com/first',
            '',
            'https://linkedin.com/in/ann/',
            'https://twitter.com/second',
        ]

        self.assertEqual(extract_profile_handles(urls), {'twitter': 'first', 'linkedin': 'ann'})

    def test_build_profile_url(self):
        self.assertEqual(build_profile_url('flickr', 'ann'), 'https://flickr.com/photos/ann')
        self.assertIsNone(build_profile_url('myspace', 'ann'))
