"""Instagram Graph API operations exposed as agent function tools."""

from igsocial.manager import InstagramManager
from igsocial.shared.settings import InstagramSettings

__version__ = "0.1.0"

__all__ = ["InstagramManager", "InstagramSettings", "__version__"]
