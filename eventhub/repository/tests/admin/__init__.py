# -*- coding: utf-8 -*-
"""Админские операции над тестами."""
