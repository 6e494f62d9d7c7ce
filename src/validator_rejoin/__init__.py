"""
Re-join the validator set by replaying an addValidator call from copied console args.
"""
__version__ = "0.1.0"
