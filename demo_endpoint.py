"""
Quick demo script to run the Future Path Finder API locally.

This script starts a local server and shows how to drive a session.
"""

import uvicorn

if __name__ == "__main__":
    print("=" * 60)
    print("Starting Future Path Finder Demo")
    print("=" * 60)
    print()
    print("📌 API Endpoints:")
    print("   - Health Check:    GET   http://localhost:8000/health")
    print("   - New session:     POST  http://localhost:8000/sessions")
    print("   - Edit profile:    PATCH http://localhost:8000/sessions/{id}/profile")
    print("   - Submit:          POST  http://localhost:8000/sessions/{id}/submit")
    print("   - Start over:      POST  http://localhost:8000/sessions/{id}/reset")
    print("   - Share payload:   GET   http://localhost:8000/sessions/{id}/share")
    print("   - API Docs:              http://localhost:8000/docs")
    print()
    print("📝 Test with curl:")
    print('   curl -X POST "http://localhost:8000/sessions"')
    print('   curl -X PATCH "http://localhost:8000/sessions/<id>/profile" \\')
    print('     -H "Content-Type: application/json" \\')
    print('     -d \'{"name": "Alex", "city": "London", "country": "UK", "interests": "AI"}\'')
    print('   curl -X POST "http://localhost:8000/sessions/<id>/submit"')
    print()
    print("=" * 60)
    print("Starting server on http://localhost:8000")
    print("Press Ctrl+C to stop")
    print("=" * 60)
    print()

    uvicorn.run(
        "pathfinder.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
