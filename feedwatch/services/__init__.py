"""Consumers of an acquired feed snapshot: display selection and notifications."""
