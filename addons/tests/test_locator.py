"""
Tests for the plugin locator.
"""
import shutil
import tempfile
from pathlib import Path

from django.test import SimpleTestCase

from ..locator import PluginLocator, integration_name_from_file
from ..testing import FIXTURE_PLUGINS_DIR, FIXTURE_PLUGINS_PACKAGE, make_plugin


class IntegrationNameTestCase(SimpleTestCase):
    """Test conversion of file names to integration names."""

    def test_single_word(self):
        self.assertEqual(integration_name_from_file('facebook_integration.py'), 'Facebook')

    def test_multiple_words(self):
        self.assertEqual(integration_name_from_file('google_plus_integration.py'), 'GooglePlus')

    def test_empty_stem(self):
        self.assertEqual(integration_name_from_file('_integration.py'), '')


class PluginLocatorTestCase(SimpleTestCase):
    """Test cases for the plugin locator."""

    def setUp(self):
        self.locator = PluginLocator()
        self.social = make_plugin(
            1,
            f"{FIXTURE_PLUGINS_PACKAGE}.social",
            directory=FIXTURE_PLUGINS_DIR / 'social'
        )
        self.crm = make_plugin(
            2,
            f"{FIXTURE_PLUGINS_PACKAGE}.crm",
            directory=FIXTURE_PLUGINS_DIR / 'crm'
        )

    def test_discover_enabled_plugins(self):
        """Test that integration modules of enabled plugins are discovered."""
        descriptors = self.locator.discover([self.social, self.crm], alphabetical=True)
        names = [d.name for d in descriptors]

        self.assertEqual(
            names,
            ['BaseSocial', 'Facebook', 'GooglePlus', 'Orphan', 'Twitter', 'Salesforce']
        )

    def test_discover_skips_disabled_plugins(self):
        """Test that disabled plugins are not scanned."""
        crm = make_plugin(2, self.crm.package, enabled=False, directory=self.crm.directory)

        descriptors = self.locator.discover([self.social, crm])

        self.assertNotIn('Salesforce', [d.name for d in descriptors])
        self.assertTrue(all(d.plugin_id == 1 for d in descriptors))

    def test_descriptor_fields(self):
        """Test the module path and namespace of a descriptor."""
        descriptors = self.locator.discover([self.crm])

        self.assertEqual(len(descriptors), 1)
        descriptor = descriptors[0]
        self.assertEqual(descriptor.name, 'Salesforce')
        self.assertEqual(descriptor.namespace, 'crm')
        self.assertEqual(descriptor.plugin_id, 2)
        self.assertEqual(
            descriptor.module_path,
            f"{FIXTURE_PLUGINS_PACKAGE}.crm.integration.salesforce_integration"
        )

    def test_files_without_suffix_are_ignored(self):
        """Test that non-integration modules are not returned."""
        descriptors = self.locator.discover([self.social])
        module_paths = [d.module_path for d in descriptors]

        self.assertFalse(any(path.endswith('helpers') for path in module_paths))
        self.assertFalse(any(path.endswith('__init__') for path in module_paths))

    def test_plugin_without_integration_directory(self):
        """Test that a plugin with no integration directory yields nothing."""
        empty = make_plugin(3, f"{FIXTURE_PLUGINS_PACKAGE}.empty", directory=FIXTURE_PLUGINS_DIR / 'empty')

        self.assertEqual(self.locator.discover([empty]), [])

    def test_missing_plugin_directory(self):
        """Test that a plugin whose directory is missing yields nothing."""
        missing = make_plugin(4, 'missing', directory=Path('/nonexistent/plugin'))

        self.assertEqual(self.locator.discover([missing]), [])


class PluginLocatorOrderingTestCase(SimpleTestCase):
    """Test ordering of discovered integrations."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        integration_dir = Path(self.temp_dir) / 'integration'
        integration_dir.mkdir()
        for name in ['zebra', 'apple', 'mango']:
            (integration_dir / f"{name}_integration.py").write_text('')
        self.plugin = make_plugin(1, 'fruit', directory=Path(self.temp_dir))

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def test_alphabetical_mode_sorts_by_name(self):
        descriptors = PluginLocator().discover([self.plugin], alphabetical=True)

        self.assertEqual([d.name for d in descriptors], ['Apple', 'Mango', 'Zebra'])

    def test_priority_mode_returns_every_file(self):
        descriptors = PluginLocator().discover([self.plugin])

        self.assertEqual(sorted(d.name for d in descriptors), ['Apple', 'Mango', 'Zebra'])
