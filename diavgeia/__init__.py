"""Diavgeia decision records to N3/RDF."""
