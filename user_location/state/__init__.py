"""
State Module
----------
Holds the observable view state (map region, address, resolution status)
that display layers subscribe to.
"""
