"""
One router per domain: data, nominations, reviews, speakers,
suggestions and auth.
"""
