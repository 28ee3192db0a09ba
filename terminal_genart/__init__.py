"""Terminal generative art: field sampling, quantisation and run-length segment batching."""
