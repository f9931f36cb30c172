"""Pure metrics engine: parsing, queries, endpoint aggregation, summaries."""
