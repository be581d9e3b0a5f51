# Shared helpers for the PineMarket backend: service results, response envelope, pagination
