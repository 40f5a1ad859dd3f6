"""Business logic: section editors, AI flows, rendering, dashboards."""
