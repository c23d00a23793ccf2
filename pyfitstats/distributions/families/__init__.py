"""
Built-in distribution families.

Importing this package registers every family below.
"""

from pyfitstats.distributions.families.beta import Beta
from pyfitstats.distributions.families.gev import GeneralizedExtremeValue
from pyfitstats.distributions.families.normal import Normal
from pyfitstats.distributions.families.tlocationscale import TLocationScale
from pyfitstats.distributions.families.weibull import Weibull

__all__ = [
    "Beta",
    "GeneralizedExtremeValue",
    "Normal",
    "TLocationScale",
    "Weibull",
]
