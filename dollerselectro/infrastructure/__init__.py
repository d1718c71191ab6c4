"""Infrastructure: HTTP access to the shop backend and local storage."""
