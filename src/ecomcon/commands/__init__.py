"""Click building blocks shared by the ecomcon command line."""
