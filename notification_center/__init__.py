"""Notification center package initializer.

Ensures the local ``notification_center`` package is resolved as a regular
package instead of a namespace package.
"""
