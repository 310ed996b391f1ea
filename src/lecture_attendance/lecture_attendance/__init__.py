"""Lecture Attendance administration package.

Organized by entity (students, modules, lectures, records) with a thin Flask
controller layer on top of service and repository layers.
"""
