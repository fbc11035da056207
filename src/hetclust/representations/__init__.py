"""Cluster representations."""

from .kluster import Kluster

__all__ = ['Kluster']
