# __init__.py
# Imports all seed functions for easy batch seeding.

from .seed_villages import seed_villages
from .seed_bloodlines import seed_bloodlines
from .seed_jutsus import seed_jutsus
