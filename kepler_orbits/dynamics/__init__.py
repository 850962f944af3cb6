"""Dynamics module for Kepler's equation and anomaly conversions."""

from .kepler_solver import *
from .anomalies import *
