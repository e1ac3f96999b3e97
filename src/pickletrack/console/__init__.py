"""Terminal front end for Pickle Track."""
