"""Security property-policy construction for DDS participants."""
