"""
Tests for identifier matching.
"""
from django.test import SimpleTestCase

from ..identifiers import field_value, resolve_identifier


class SingleIdentifierTestCase(SimpleTestCase):
    """Test cases for a single identifier field."""

    def test_exact_match(self):
        self.assertEqual(resolve_identifier('email', {'email': 'a@x.com'}), 'a@x.com')

    def test_substring_match(self):
        fields = {'firstname': 'Ann', 'twitterHandle': 'ann'}

        self.assertEqual(resolve_identifier('twitter', fields), 'ann')

    def test_first_match_wins(self):
        fields = {'workEmail': 'w@x.com', 'email': 'a@x.com'}

        self.assertEqual(resolve_identifier('email', fields), 'w@x.com')

    def test_match_is_case_sensitive(self):
        self.assertIsNone(resolve_identifier('email', {'EMAIL': 'a@x.com'}))

    def test_value_shape_is_unwrapped(self):
        fields = {'email': {'value': 'a@x.com', 'label': 'Email'}}

        self.assertEqual(resolve_identifier('email', fields), 'a@x.com')

    def test_no_match(self):
        self.assertIsNone(resolve_identifier('skype', {'email': 'a@x.com'}))

    def test_empty_inputs(self):
        self.assertIsNone(resolve_identifier('email', {}))
        self.assertIsNone(resolve_identifier('', {'email': 'a@x.com'}))


class MultipleIdentifierTestCase(SimpleTestCase):
    """Test cases for composite identifiers."""

    def test_stops_once_every_hint_is_satisfied(self):
        fields = {'emailAddress': 'a@x.com', 'phoneNumber': '555', 'other': 'z'}

        result = resolve_identifier(['email', 'phone'], fields)

        self.assertEqual(result, {'emailAddress': 'a@x.com', 'phoneNumber': '555'})

    def test_fields_after_completion_are_not_collected(self):
        fields = {'email': 'a@x.com', 'phone': '555', 'phone2': '777'}

        result = resolve_identifier(['email', 'phone'], fields)

        self.assertEqual(result, {'email': 'a@x.com', 'phone': '555'})

    def test_duplicate_values_are_skipped(self):
        fields = {'email': 'a@x.com', 'emailCopy': 'a@x.com', 'emailWork': 'w@x.com'}

        result = resolve_identifier(['email', 'emailW'], fields)

        self.assertEqual(result, {'email': 'a@x.com', 'emailWork': 'w@x.com'})

    def test_partial_match(self):
        result = resolve_identifier(['email', 'phone'], {'email': 'a@x.com', 'city': 'Oslo'})

        self.assertEqual(result, {'email': 'a@x.com'})

    def test_no_match(self):
        self.assertIsNone(resolve_identifier(['email', 'phone'], {'city': 'Oslo'}))


class GroupedIdentifierTestCase(SimpleTestCase):
    """Test cases for fields grouped by field group."""

    def setUp(self):
        self.fields = {
            'core': {
                'email': {'value': 'a@x.com'},
                'firstname': {'value': 'Ann'},
            },
            'social': {
                'twitter': {'value': 'ann'},
                'skype': {'value': 'ann.skype'},
            },
        }

    def test_single_spec_scans_groups(self):
        self.assertEqual(resolve_identifier('twitter', self.fields), 'ann')

    def test_single_spec_first_group_wins(self):
        self.fields['social']['email2'] = {'value': 'other@x.com'}

        self.assertEqual(resolve_identifier('email', self.fields), 'a@x.com')

    def test_multi_spec_across_groups(self):
        result = resolve_identifier(['email', 'twitter'], self.fields)

        self.assertEqual(result, {'email': 'a@x.com', 'twitter': 'ann'})

    def test_multi_spec_completed_in_first_group(self):
        result = resolve_identifier(['email', 'first'], self.fields)

        self.assertEqual(result, {'email': 'a@x.com', 'firstname': 'Ann'})


class FieldValueTestCase(SimpleTestCase):

    def test_plain_value(self):
        self.assertEqual(field_value('x'), 'x')

    def test_wrapped_value(self):
        self.assertEqual(field_value({'value': 'x'}), 'x')

    def test_mapping_without_value(self):
        self.assertEqual(field_value({'label': 'x'}), {'label': 'x'})
