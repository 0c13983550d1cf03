"""kubetrack - supervise Spark applications running on Kubernetes."""

__version__ = "0.1.0"
