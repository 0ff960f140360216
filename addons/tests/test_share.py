"""
Tests for share button rendering.
"""
from unittest.mock import Mock

from django.test import SimpleTestCase

from ..features import FeatureTag
from ..rendering import DjangoTemplateRenderer, get_template_renderer, set_template_renderer
from ..share import ShareButtonBuilder, get_share_template_name
from ..testing import make_integration_class, make_registry, make_settings

SHARE = FeatureTag.SHARE_BUTTON


class ShareButtonBuilderTestCase(SimpleTestCase):
    """Test cases for building share buttons."""

    def setUp(self):
        classes = {name: make_integration_class(name) for name in ['Twitter', 'Facebook', 'LinkedIn', 'Salesforce']}
        settings = [
            make_settings(
                'Twitter',
                [SHARE],
                feature_settings={'shareButton': {'via': 'mautic'}},
                api_keys={'consumer_id': 'abc'},
            ),
            make_settings('Facebook', [SHARE]),
            make_settings('LinkedIn', [SHARE], published=False),
            make_settings('Salesforce', [FeatureTag.PUSH_LEAD]),
        ]
        self.registry = make_registry(classes, settings=settings)
        self.renderer = Mock()
        self.renderer.render.side_effect = lambda template, context: f"<{template}>"

    def test_published_share_integrations_in_name_order(self):
        buttons = ShareButtonBuilder(self.registry, renderer=self.renderer).build()

        self.assertEqual(list(buttons), ['Facebook', 'Twitter'])
        self.assertEqual(buttons['Twitter'], '<social/integration/twitter/share.html>')

    def test_context_merges_share_settings_and_keys(self):
        ShareButtonBuilder(self.registry, renderer=self.renderer).build()

        contexts = {call.args[0]: call.args[1] for call in self.renderer.render.call_args_list}
        self.assertEqual(
            contexts['social/integration/twitter/share.html'],
            {'settings': {'via': 'mautic', 'keys': {'consumer_id': 'abc'}}}
        )
        self.assertEqual(
            contexts['social/integration/facebook/share.html'],
            {'settings': {'keys': {}}}
        )

    def test_buttons_are_rendered_once(self):
        builder = ShareButtonBuilder(self.registry, renderer=self.renderer)

        builder.build()
        builder.build()
        self.assertEqual(self.renderer.render.call_count, 2)

        builder.invalidate()
        builder.build()
        self.assertEqual(self.renderer.render.call_count, 4)

    def test_render_failure_skips_integration(self):
        def render(template, context):
            if 'facebook' in template:
                raise ValueError('missing template')
            return 'ok'

        self.renderer.render.side_effect = render

        buttons = ShareButtonBuilder(self.registry, renderer=self.renderer).build()

        self.assertEqual(buttons, {'Twitter': 'ok'})

    def test_uses_global_renderer_by_default(self):
        previous = get_template_renderer()
        set_template_renderer(self.renderer)
        try:
            buttons = ShareButtonBuilder(self.registry).build()
        finally:
            set_template_renderer(previous)

        self.assertEqual(len(buttons), 2)

    def test_template_name(self):
        integration = self.registry.get_integration('LinkedIn')

        self.assertEqual(get_share_template_name(integration, 'social'), 'social/integration/linkedin/share.html')


class DjangoTemplateRendererTestCase(SimpleTestCase):
    """Test rendering share buttons with Django templates."""

    def test_renders_plugin_template(self):
        classes = {'Twitter': make_integration_class('Twitter')}
        settings = [
            make_settings(
                'Twitter',
                [SHARE],
                feature_settings={'shareButton': {'via': 'mautic'}},
                api_keys={'consumer_id': 'abc'},
            ),
        ]
        builder = ShareButtonBuilder(make_registry(classes, settings=settings), renderer=DjangoTemplateRenderer())

        markup = builder.build()['Twitter']

        self.assertIn('data-via="mautic"', markup)
        self.assertIn('data-key="abc"', markup)
