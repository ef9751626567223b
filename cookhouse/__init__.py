"""
                Daddy's Cook House Backend

Registration, login and order submission for a small restaurant,
each confirmed by a transactional email.

Author: Khalil_Bannouri
Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"
__author__ = "Khalil_Bannouri"
