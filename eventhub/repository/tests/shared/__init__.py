# -*- coding: utf-8 -*-
"""Общие запросы к тестам и попыткам."""
