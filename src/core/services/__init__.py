"""Services: stdin datapoint parsing and command dispatch."""
