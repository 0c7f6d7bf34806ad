from effci.optimize.brent import BrentResult, brent

__all__ = ["BrentResult", "brent"]
