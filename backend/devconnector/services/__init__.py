"""
DevConnector Backend — Services Package
=========================================

What:  Business logic for each resource, independent of HTTP.
How:   Each service is a plain class built once by the application factory
       with the settings, database and clients it needs, then stored on
       `app.state`. Route handlers reach them through the getters in
       `devconnector.dependencies`.

Service Inventory:
    - auth_service.py:    login, current user lookup
    - user_service.py:    registration, Gravatar avatars
    - profile_service.py: profile upsert/read/delete, experience, education
    - github_service.py:  GitHub repository proxy
    - post_service.py:    posts, likes, comments
"""
