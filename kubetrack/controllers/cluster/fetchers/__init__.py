"""Fetchers for cluster-side application data."""

from kubetrack.controllers.cluster.fetchers.report_fetcher import ReportFetcher

__all__ = ["ReportFetcher"]
