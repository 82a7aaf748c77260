"""HTTP middleware for the CrossPay API."""
