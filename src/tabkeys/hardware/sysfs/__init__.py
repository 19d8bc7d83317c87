"""Linux backend: wacom sysfs LED/OLED attributes plus external helper programs.

Provides :class:`SysfsHardwareFactory`, :class:`SysfsTablet`,
:class:`Img2RawConverter` (``intuos4led-img2raw``) and
:class:`XdotoolInjector` (``xdotool``).
"""
