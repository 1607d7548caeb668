"""Collaboration bounded context.

Manages which identities may act as collaborators on a space. Membership
lives in a user policy on the authorization server; spaces, their policy
resources and identities are read from the local database.
"""
