"""SynergySphere collaboration API."""
