"""Demos module - Headless runs of the Snake bot"""
