"""Data models for kubetrack."""
