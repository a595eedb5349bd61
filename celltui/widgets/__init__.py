"""Reusable widgets that draw into windows."""