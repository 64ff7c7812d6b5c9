"""Saffa as a Service - South African phrases over HTTP."""
