"""
Built-in primary event distributions.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from primarycensored.families.builtins.primary.expgrowth import configure_expgrowth_primary
from primarycensored.families.builtins.primary.uniform import configure_uniform_primary

__all__ = [
    "configure_expgrowth_primary",
    "configure_uniform_primary",
]
