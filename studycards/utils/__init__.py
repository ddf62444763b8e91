"""Utilities for StudyCards"""
