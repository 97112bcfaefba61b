"""Routing — named route table with first-wins matching and link generation.

Routes are registered against a single request snapshot; the first
eligible registration becomes the selected route for that request.
"""
