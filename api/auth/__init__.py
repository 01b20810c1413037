"""
Bearer-token authentication: signup/login endpoints and the
`get_current_user` dependency used by protected routes.
"""
