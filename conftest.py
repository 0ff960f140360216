"""
Test configuration for the add-ons app
"""

import os
import sys
import django

# Make the addons app and test_settings importable
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

# Configure Django settings for tests
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'test_settings')

# Called by pytest before test collection
def pytest_configure():
    django.setup()
