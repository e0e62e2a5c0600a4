import uvicorn

if __name__ == "__main__":
    print("⚓ Starting Captain's Lounge...")

    # Start the server
    uvicorn.run(
        "lounge.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
