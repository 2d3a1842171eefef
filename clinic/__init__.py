"""Clinic application.

Public pages, the admin back-office and the JSON API of the clinic
website, all built on the table store in :mod:`clinic.store`.
"""
