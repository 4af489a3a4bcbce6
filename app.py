#!/usr/bin/env python3
from typing import List
from fastapi import FastAPI, HTTPException, Depends, status, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from exceptions import (Exceptions, ThreadViewError, ThreadNotFoundError, CommentNotFoundError,
                        PageNotFoundError, PageLimitError)
from models import (PostPayload, ThreadResponse, ThreadListResponse, CommentAdd, ReplyCreate,
                    CommentHide, ErrorResponse)
from pages import PageManager, resolve_post
from threads import ThreadManager
from config import API_PREFIX, ALLOWED_ORIGINS, GZIP_MIN_SIZE
import logging
import time

logger = logging.getLogger(__name__)

app = FastAPI(title="Thread View API", description="Linear thread view over nested comment trees", version="1.0.0")

app.add_middleware(GZipMiddleware, minimum_size=GZIP_MIN_SIZE)
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type"]
)

page_manager = PageManager()

ERROR_STATUS = {
    PageNotFoundError: Exceptions.PAGE_NOT_FOUND,
    ThreadNotFoundError: Exceptions.THREAD_NOT_FOUND,
    CommentNotFoundError: Exceptions.COMMENT_NOT_FOUND,
    PageLimitError: Exceptions.PAGE_LIMIT,
}


def get_page_manager() -> PageManager:
    return page_manager


def get_thread_manager(root_id: str, pages: PageManager = Depends(get_page_manager)) -> ThreadManager:
    return pages.require_thread_manager(root_id)


def thread_list(tm: ThreadManager, response: Response) -> ThreadListResponse:
    response.headers["ETag"] = f'"{tm.root_id}-{tm.version}"'
    return ThreadListResponse.from_manager(tm)


@app.get(API_PREFIX + "/pages", response_model=List[str])
async def get_pages(pages: PageManager = Depends(get_page_manager)):
    return pages.get_pages()

@app.put(API_PREFIX + "/pages/{root_id}", response_model=ThreadListResponse)
async def load_page(root_id: str, root_post: PostPayload, response: Response,
                    pages: PageManager = Depends(get_page_manager)):
    if root_post.post_hash_hex != root_id:
        raise Exceptions.ROOT_MISMATCH
    tm = pages.load_page(root_post.to_post())
    return thread_list(tm, response)

@app.delete(API_PREFIX + "/pages/{root_id}")
async def close_page(root_id: str, pages: PageManager = Depends(get_page_manager)):
    if not pages.close_page(root_id):
        raise Exceptions.PAGE_NOT_FOUND
    return {"message": "Page closed"}

@app.post(API_PREFIX + "/pages/{root_id}/reset", response_model=ThreadListResponse)
async def reset_page(response: Response, tm: ThreadManager = Depends(get_thread_manager)):
    tm.reset()
    return thread_list(tm, response)

@app.get(API_PREFIX + "/pages/{root_id}/threads", response_model=ThreadListResponse)
async def get_threads(response: Response, tm: ThreadManager = Depends(get_thread_manager)):
    return thread_list(tm, response)

@app.post(API_PREFIX + "/pages/{root_id}/threads", response_model=ThreadListResponse)
async def add_thread(thread_data: CommentAdd, response: Response, tm: ThreadManager = Depends(get_thread_manager)):
    comment = thread_data.comment.to_post()
    if thread_data.position == "first":
        tm.prepend_comment(comment)
    else:
        tm.append_comment(comment)
    return thread_list(tm, response)

@app.get(API_PREFIX + "/pages/{root_id}/threads/{thread_id}", response_model=ThreadResponse)
async def get_thread(thread_id: str, tm: ThreadManager = Depends(get_thread_manager)):
    thread = tm.get_thread(thread_id)
    if not thread:
        raise Exceptions.THREAD_NOT_FOUND
    return ThreadResponse.from_thread(thread)

@app.delete(API_PREFIX + "/pages/{root_id}/threads/{thread_id}", response_model=ThreadListResponse)
async def remove_thread(thread_id: str, response: Response, tm: ThreadManager = Depends(get_thread_manager)):
    tm.remove_thread(thread_id)
    return thread_list(tm, response)

@app.post(API_PREFIX + "/pages/{root_id}/threads/{thread_id}/replies", response_model=ThreadResponse)
async def add_reply(thread_id: str, reply_data: ReplyCreate, tm: ThreadManager = Depends(get_thread_manager)):
    thread = tm.get_thread(thread_id)
    if not thread:
        raise ThreadNotFoundError(thread_id)
    replying_to = resolve_post(thread, reply_data.replying_to)
    tm.add_reply_to_comment(thread_id, replying_to, reply_data.reply.to_post())
    return ThreadResponse.from_thread(thread)

@app.post(API_PREFIX + "/pages/{root_id}/threads/{thread_id}/hide", response_model=ThreadResponse)
async def hide_comment(thread_id: str, hide_data: CommentHide, tm: ThreadManager = Depends(get_thread_manager)):
    thread = tm.get_thread(thread_id)
    if not thread:
        raise ThreadNotFoundError(thread_id)
    comment = resolve_post(thread, hide_data.comment)
    parent = resolve_post(thread, hide_data.parent)
    tm.hide_comment(comment, parent, thread_id)
    return ThreadResponse.from_thread(thread)

@app.exception_handler(ThreadViewError)
async def thread_view_exception_handler(request: Request, exc: ThreadViewError):
    http_exc = ERROR_STATUS.get(type(exc), Exceptions.NOT_FOUND)
    return JSONResponse(
        status_code=http_exc.status_code,
        content=ErrorResponse(error=exc.__class__.__name__, message=str(exc)).model_dump()
    )

@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=exc.__class__.__name__, message=exc.detail).model_dump()
    )

@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s", request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(error="InternalServerError", message="An unexpected error occurred").model_dump()
    )

@app.get("/health")
async def health_check(pages: PageManager = Depends(get_page_manager)):
    return {
        "status": "healthy",
        "timestamp": time.time(),
        "pages_loaded": len(pages.get_pages())
    }

if __name__ == "__main__":
    import uvicorn
    print("Starting thread view server...")
    print("API docs at http://localhost:8000/docs")
    uvicorn.run(app, host="0.0.0.0", port=8000)
