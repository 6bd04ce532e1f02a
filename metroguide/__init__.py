"""
MetroGuide - 지하철 최단 경로 및 탑승 위치 안내
"""
