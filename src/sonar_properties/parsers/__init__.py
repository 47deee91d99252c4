"""Readers for build-produced inputs."""
