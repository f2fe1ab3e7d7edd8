from .basic import builtin_functions

__all__ = ['builtin_functions']
