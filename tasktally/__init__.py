# -*- coding: utf-8 -*-
"""Single-active-task time tracker with a Tkinter front end."""

__version__ = "0.1.0"
