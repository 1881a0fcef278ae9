"""HAL implementations.

Import concrete backends from their modules; they pull in platform
libraries (mss, pynput) that need a display to be usable.
"""
